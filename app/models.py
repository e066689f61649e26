from sqlmodel import SQLModel, Field

class KVEntry(SQLModel, table=True):
    """One value in the key-value store. Namespaces share the table."""
    namespace: str = Field(primary_key=True)
    key: str = Field(primary_key=True)
    value: str
