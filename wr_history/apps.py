from django.apps import AppConfig


class WrHistoryConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "wr_history"
    verbose_name = "WR history"
