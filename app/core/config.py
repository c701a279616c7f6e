import os
from dotenv import load_dotenv

load_dotenv()  # Carga las variables de entorno

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./divvy.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")

# El proveedor de identidad firma los tokens; aquí solo los verificamos
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Ventana de transacciones recientes usada para reconstruir el patrimonio
NET_WORTH_WINDOW = int(os.getenv("NET_WORTH_WINDOW", "50"))
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "USD")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
