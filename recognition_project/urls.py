"""
Main URL Router for the Recognition Platform
============================================

Routes incoming HTTP requests to the admin site and to the recognition app
(vote form, analytics dashboard, winners gallery, live feed).
"""

from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Django admin panel (read-only view of nominations)
    path('admin/', admin.site.urls),

    path('', include('recognition.urls')),
]
