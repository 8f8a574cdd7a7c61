"""
WSGI config for the Recognition Platform project
================================================

Exposes the WSGI callable as a module-level variable named ``application``.
For more information on this file, see:
https://docs.djangoproject.com/en/4.2/howto/deployment/wsgi/

Used by Gunicorn, mod_wsgi and other WSGI servers.
"""

import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'recognition_project.settings')

application = get_wsgi_application()
