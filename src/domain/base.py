"""Base class for persisted domain entities"""

from sqlalchemy import BigInteger, Integer
from sqlmodel import SQLModel

# SQLite only autoincrements INTEGER primary keys
IdType = BigInteger().with_variant(Integer(), "sqlite")


class BaseModel(SQLModel):
    """Shared SQLModel base for all tables"""

    pass
