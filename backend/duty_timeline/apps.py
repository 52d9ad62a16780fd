from django.apps import AppConfig


class DutyTimelineConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "duty_timeline"
    verbose_name = "Driver's Daily Log Sheet"
