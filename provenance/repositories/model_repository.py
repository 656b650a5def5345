# provenance/repositories/model_repository.py
from ..core.database import Model
from .. import db
from ..utils.logger import setup_logger

class ModelRepository:
    def __init__(self):
        self.logger = setup_logger()

    def create_model(self, **fields):
        """Repository: Register a trained model"""
        try:
            model = Model(**fields)
            db.session.add(model)
            db.session.commit()
            self.logger.info(f"Repository: Created model {model.id} ({model.cid})")
            return model
        except Exception as e:
            db.session.rollback()
            self.logger.error(f"Repository: Failed to create model: {str(e)}")
            raise

    def list_models(self):
        """Repository: List models in ID order"""
        try:
            return Model.query.order_by(Model.id).all()
        except Exception as e:
            self.logger.error(f"Repository: Error listing models: {str(e)}")
            raise

    def get_model(self, model_id):
        """Repository: Get model by ID"""
        try:
            return db.session.get(Model, model_id)
        except Exception as e:
            self.logger.error(f"Repository: Failed to get model {model_id}: {str(e)}")
            raise
