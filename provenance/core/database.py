# provenance/core/database.py
from .. import db
from datetime import datetime

DATASET_STATUSES = ('processing', 'verified', 'failed')
RELATIONSHIP_STATUSES = ('processing', 'verified')
ACCESS_CONTROLS = ('public', 'private', 'custom')


def _isoformat(value):
    return value.isoformat() if value else None


class User(db.Model):
    __tablename__ = 'users'
    __table_args__ = {'sqlite_autoincrement': True}

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password = db.Column(db.String(120), nullable=False)

    def to_dict(self):
        return {"id": self.id, "username": self.username}


class Dataset(db.Model):
    __tablename__ = 'datasets'
    __table_args__ = {'sqlite_autoincrement': True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    cid = db.Column(db.String(255), nullable=False)  # IPFS content identifier
    size = db.Column(db.String(50), nullable=False)
    domain = db.Column(db.String(120), nullable=False)
    format = db.Column(db.String(120), nullable=False)
    license = db.Column(db.String(120), nullable=False)
    access_control = db.Column(db.String(20), nullable=False, default='public')
    description = db.Column(db.Text)
    tags = db.Column(db.JSON, default=list)
    files_total_count = db.Column(db.Integer, default=0)
    uploaded_at = db.Column(db.DateTime, default=datetime.utcnow)
    status = db.Column(db.String(20), nullable=False, default='processing')
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'))

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "cid": self.cid,
            "size": self.size,
            "domain": self.domain,
            "format": self.format,
            "license": self.license,
            "accessControl": self.access_control,
            "description": self.description,
            "tags": self.tags or [],
            "filesTotalCount": self.files_total_count,
            "uploadedAt": _isoformat(self.uploaded_at),
            "status": self.status,
            "userId": self.user_id,
        }


class Model(db.Model):
    __tablename__ = 'models'
    __table_args__ = {'sqlite_autoincrement': True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    cid = db.Column(db.String(255), nullable=False)  # IPFS content identifier
    architecture = db.Column(db.String(255))
    description = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'))

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "cid": self.cid,
            "architecture": self.architecture,
            "description": self.description,
            "createdAt": _isoformat(self.created_at),
            "userId": self.user_id,
        }


class Relationship(db.Model):
    """A claimed dataset -> model training edge."""
    __tablename__ = 'dataset_model_relationships'
    __table_args__ = {'sqlite_autoincrement': True}

    id = db.Column(db.Integer, primary_key=True)
    dataset_id = db.Column(db.Integer, db.ForeignKey('datasets.id'), nullable=False)
    model_id = db.Column(db.Integer, db.ForeignKey('models.id'), nullable=False)
    usage_date = db.Column(db.DateTime, default=datetime.utcnow)
    status = db.Column(db.String(20), nullable=False, default='processing')
    licensing_info = db.Column(db.Text, nullable=False)
    processing_cid = db.Column(db.String(255))  # optional preprocessing step

    def to_dict(self):
        return {
            "id": self.id,
            "datasetId": self.dataset_id,
            "modelId": self.model_id,
            "usageDate": _isoformat(self.usage_date),
            "status": self.status,
            "licensingInfo": self.licensing_info,
            "processingCid": self.processing_cid,
        }
