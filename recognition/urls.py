"""
URL routing for the recognition app
===================================

Maps URL patterns to view functions for:
- Nominating a colleague
- Analytics dashboard
- Winners gallery
- Live feed API
"""

from django.urls import path # pyright: ignore[reportMissingModuleSource]
from . import views

app_name = 'recognition'

urlpatterns = [
    # Nomination form (home page)
    path('', views.vote, name='vote'),

    # Admin dashboard
    path('analytics/', views.analytics, name='analytics'),

    # Leaderboard and category champions
    path('winners/', views.winners, name='winners'),

    # Live feed polled by the page footer (JSON)
    path('api/feed/', views.feed, name='api_feed'),
]
