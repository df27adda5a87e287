# FLASK_APP entry point: `flask --app glasspos.wsgi run`
from glasspos import create_app

app = create_app()
