from django.apps import AppConfig


class EventhubConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "eventhub"
    verbose_name = "Event enrollment"
