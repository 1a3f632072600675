from django.urls import path

from .views import SummarizeView, TakeawaysView

urlpatterns = [
    path("ai/summarize/", SummarizeView.as_view(), name="ai-summarize"),
    path("ai/takeaways/", TakeawaysView.as_view(), name="ai-takeaways"),
]
