from django.apps import AppConfig
from django.utils.module_loading import autodiscover_modules


class PickersConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'pickers'

    def ready(self):
        # Registers the picker declared in each installed app's pickers.py
        autodiscover_modules('pickers')
