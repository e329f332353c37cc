from sqlalchemy import Column, Integer, String

from instagram.core.database import Base


class UserEntity(Base):
    __tablename__ = "users"
    # ids nunca são reaproveitados no SQLite
    __table_args__ = {"sqlite_autoincrement": True}

    id                 = Column(Integer, primary_key=True, index=True, autoincrement=True)
    full_name          = Column(String, nullable=False)
    username           = Column(String, unique=True, index=True, nullable=False)
    email              = Column(String, unique=True, index=True, nullable=False)
    encrypted_password = Column(String, nullable=False)

    def __repr__(self):
        return f"<UserEntity id={self.id} username={self.username!r}>"
