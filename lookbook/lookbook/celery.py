import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'lookbook.settings')

app = Celery('lookbook')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
