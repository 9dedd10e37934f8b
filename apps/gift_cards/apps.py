from django.apps import AppConfig


class GiftCardsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.gift_cards'
    verbose_name = 'Gift Cards'

    def ready(self):
        import apps.gift_cards.signals  # noqa: F401
