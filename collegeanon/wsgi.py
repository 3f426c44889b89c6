import os

import certifi
from django.core.wsgi import get_wsgi_application

os.environ.setdefault("SSL_CERT_FILE", certifi.where())
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'collegeanon.settings')

application = get_wsgi_application()
