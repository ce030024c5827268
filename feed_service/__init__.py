"""Django project package for the notification feed service."""
