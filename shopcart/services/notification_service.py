# shopcart/services/notification_service.py
import uuid

from shopcart.celery_worker import celery_app
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien.
    Uzywa Celery do asynchronicznego przetwarzania.
    """

    def send_order_notification(self, user_id: uuid.UUID, order_id: uuid.UUID, order_number: str) -> None:
        send_order_notification_task.delay(str(user_id), str(order_id), order_number)


@celery_app.task(name="shopcart.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: str, order_id: str, order_number: str):
    """
    Celery task - w prawdziwym systemie wyslalby email/SMS/push.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_number} ({order_id}) placed")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
