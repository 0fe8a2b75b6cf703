"""
URL configuration for the Contact Form API.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path, include

from core import views

urlpatterns = [
    path('', views.root, name='root'),
    path('admin/', admin.site.urls),
    path('api/health', views.health, name='health'),
    path('api/', include('contact.urls')),  # Contact form submission and management
]

handler404 = 'core.views.not_found'
handler500 = 'core.views.server_error'
