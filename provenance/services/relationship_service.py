# provenance/services/relationship_service.py
from ..core.database import RELATIONSHIP_STATUSES
from ..repositories.dataset_repository import DatasetRepository
from ..repositories.model_repository import ModelRepository
from ..repositories.relationship_repository import RelationshipRepository
from ..utils.exceptions import NotFoundError, ValidationError
from ..utils.logger import setup_logger

class RelationshipService:
    def __init__(self, lineage_service=None):
        self.repository = RelationshipRepository()
        self.dataset_repository = DatasetRepository()
        self.model_repository = ModelRepository()
        self.lineage_service = lineage_service
        self.logger = setup_logger()

    def list_relationships(self, dataset_id=None, model_id=None):
        return self.repository.list_relationships(dataset_id=dataset_id, model_id=model_id)

    def get_relationship(self, relationship_id):
        relationship = self.repository.get_relationship(relationship_id)
        if relationship is None:
            raise NotFoundError("Relationship not found")
        return relationship

    def create_relationship(self, dataset_id, model_id, licensing_info, processing_cid=None, status='processing'):
        """Service: Record that a model was trained on a dataset.

        Both ends must already exist; nothing is written otherwise.
        """
        if status not in RELATIONSHIP_STATUSES:
            raise ValidationError(f"Invalid relationship status: {status}")
        if self.dataset_repository.get_dataset(dataset_id) is None:
            raise ValidationError("Dataset not found")
        if self.model_repository.get_model(model_id) is None:
            raise ValidationError("Model not found")
        try:
            relationship = self.repository.create_relationship(
                dataset_id=dataset_id,
                model_id=model_id,
                licensing_info=licensing_info,
                processing_cid=processing_cid or None,
                status=status,
            )
            self.logger.info(f"Service: Created relationship {relationship.id}")
            return relationship
        except Exception as e:
            self.logger.error(f"Service: Failed to create relationship: {str(e)}")
            raise

    def update_status(self, relationship_id, status):
        if status not in RELATIONSHIP_STATUSES:
            raise ValidationError(f"Invalid relationship status: {status}")
        relationship = self.repository.update_status(relationship_id, status)
        if relationship is None:
            raise NotFoundError("Relationship not found")
        return relationship

    def verify_relationship(self, relationship_id):
        """Service: Run lineage verification and promote the edge to verified on success.

        Returns ``(verified, relationship)``. The dataset's own status is left
        alone, and a failed check does not demote an already verified edge.
        """
        relationship = self.get_relationship(relationship_id)
        dataset = self.dataset_repository.get_dataset(relationship.dataset_id)
        model = self.model_repository.get_model(relationship.model_id)
        if dataset is None or model is None:
            raise NotFoundError("Relationship references a missing dataset or model")

        verified = self.lineage_service.verify(dataset.cid, relationship.processing_cid, model.cid)
        if verified and relationship.status != 'verified':
            relationship = self.repository.update_status(relationship.id, 'verified')
        return verified, relationship
