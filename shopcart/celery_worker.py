# shopcart/celery_worker.py
from celery import Celery

from shopcart.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "shopcart",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# taski trzeba zaimportowac jawnie zeby celery je zarejestrowal
celery_app.conf.imports = (
    "shopcart.services.notification_service",
)

celery_app.conf.timezone = "UTC"
