# portal/services/notification_service.py
from portal.celery_worker import celery_app
from portal.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Potwierdzenie zlozenia zamowienia.
    Uzywa Celery, zeby checkout nie czekal na wysylke.
    """

    @staticmethod
    def send_order_confirmation(user_id: str, order_id: str, email: str):
        send_order_confirmation_task.delay(user_id, order_id, email)


@celery_app.task(name="portal.services.notification_service.send_order_confirmation_task")
def send_order_confirmation_task(user_id: str, order_id: str, email: str):
    """
    Na razie tylko loguje, docelowo email do klienta.
    """
    logger.info(f"[NOTIFICATION] User {user_id} <{email}>: order {order_id} submitted")

    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
