# ASGI entry point
# Serve with any ASGI server, e.g. `uvicorn asgi:application` from backend/

import os
import sys

# Add project to path
project_path = os.path.dirname(os.path.abspath(__file__))
if project_path not in sys.path:
    sys.path.insert(0, project_path)

# Load environment variables from .env file if present
from dotenv import load_dotenv
env_path = os.path.join(project_path, '.env')
if os.path.exists(env_path):
    load_dotenv(env_path)

# Import the FastAPI app
from signature_engine.main import app as application
