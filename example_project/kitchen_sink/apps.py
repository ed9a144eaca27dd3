from django.apps import AppConfig


class KitchenSinkConfig(AppConfig):
    name = "example_project.kitchen_sink"
