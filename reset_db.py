from sqlmodel import SQLModel
from app.database import engine
import app.models  # noqa: F401

SQLModel.metadata.drop_all(engine)
SQLModel.metadata.create_all(engine)

print("✅ Base de datos reseteada correctamente (tablas del ledger recreadas).")
