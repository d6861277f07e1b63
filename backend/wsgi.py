"""WSGI entry point: ``gunicorn -c gunicorn.conf.py wsgi:app``."""

from recipes_api import create_app

app = create_app()
