import os

from dotenv import load_dotenv

load_dotenv()

TASKLIST_API_BASE = os.getenv("TASKLIST_API_BASE", "http://127.0.0.1:8000/api")
TASKLIST_HTTP_TIMEOUT = float(os.getenv("TASKLIST_HTTP_TIMEOUT", "10"))
