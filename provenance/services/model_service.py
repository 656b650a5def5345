# provenance/services/model_service.py
from ..repositories.model_repository import ModelRepository
from ..utils.exceptions import NotFoundError
from ..utils.logger import setup_logger

class ModelService:
    def __init__(self):
        self.repository = ModelRepository()
        self.logger = setup_logger()

    def register_model(self, name, cid, architecture=None, description=None, user_id=None):
        """Service: Register a trained model by its CID"""
        try:
            model = self.repository.create_model(
                name=name,
                cid=cid,
                architecture=architecture,
                description=description,
                user_id=user_id,
            )
            self.logger.info(f"Service: Registered model {model.name} ({model.cid})")
            return model
        except Exception as e:
            self.logger.error(f"Service: Failed to register model {name}: {str(e)}")
            raise

    def get_model(self, model_id):
        """Service: Get a model or raise NotFoundError"""
        model = self.repository.get_model(model_id)
        if model is None:
            raise NotFoundError("Model not found")
        return model

    def list_models(self):
        """Service: List registered models"""
        models = self.repository.list_models()
        self.logger.info("Service: Listed registered models")
        return models
