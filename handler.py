"""Serverless entry point (AWS Lambda / Netlify functions).

Configuration comes from the function's environment, chiefly OPENAI_API_KEY.
"""

from mangum import Mangum

from app import create_app
from core.config import load_config
from ui.console_logger import ConsoleLogger

config = load_config()
app = create_app(config, ConsoleLogger(verbose=config.proxy.debug))

handler = Mangum(app, lifespan="auto")
