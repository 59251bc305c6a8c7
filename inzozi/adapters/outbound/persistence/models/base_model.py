# inzozi/adapters/outbound/persistence/models/base_model.py

from sqlalchemy import event
from sqlalchemy.orm import declarative_base

from inzozi.shared.middleware.logging_middleware import PasswordProtectionMiddleware

Base = declarative_base()

# Every model inheriting from Base with a password column is covered
for _hook in ("before_insert", "before_update"):
    event.listen(Base, _hook, PasswordProtectionMiddleware.before_insert_or_update, propagate=True)
