# wakemeup/models/destination.py
import sqlalchemy as sa
from wakemeup.utils.database import Base


class Destination(Base):
    __tablename__ = "destinations"
    id = sa.Column(sa.Integer, primary_key=True, autoincrement=True)
    name = sa.Column(sa.String(255), nullable=False)
    latitude = sa.Column(sa.Double, nullable=False)
    longitude = sa.Column(sa.Double, nullable=False)
    created_at = sa.Column(sa.DateTime, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "created_at": self.created_at,
        }
