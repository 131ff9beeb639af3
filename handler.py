"""
AWS Lambda entry point — serves the release confidence API through Mangum.
"""

from mangum import Mangum

from app.main import app

handler = Mangum(app, lifespan="off")
