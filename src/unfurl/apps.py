from django.apps import AppConfig


class UnfurlConfig(AppConfig):
    """Link previews for URLs pasted into the nugget composer."""

    name = "unfurl"
