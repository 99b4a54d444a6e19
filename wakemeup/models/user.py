# wakemeup/models/user.py
import sqlalchemy as sa
from wakemeup.utils.database import Base


class User(Base):
    __tablename__ = "users"
    id = sa.Column(sa.Integer, primary_key=True, autoincrement=True)
    email = sa.Column(sa.String(255), unique=True, nullable=False)
    # bcrypt digest, salt and cost are embedded in the string
    password_hash = sa.Column(sa.String(255), nullable=False)
    created_at = sa.Column(sa.DateTime, nullable=False)
