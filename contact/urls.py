"""
Contact URL Configuration

Mounted under /api/.
"""
from django.urls import path
from .views import (
    ContactFormSubmitView,
    ContactListView,
    ContactDetailView,
    ContactStatusUpdateView,
    ContactStatsView
)

app_name = 'contact'

urlpatterns = [
    path('contact-us', ContactFormSubmitView.as_view(), name='submit'),
    path('contacts', ContactListView.as_view(), name='list'),
    path('contacts/stats/summary', ContactStatsView.as_view(), name='stats'),
    path('contacts/<str:id>', ContactDetailView.as_view(), name='detail'),
    path('contacts/<str:id>/status', ContactStatusUpdateView.as_view(), name='status'),
]
