# provenance/repositories/relationship_repository.py
from ..core.database import Relationship
from .. import db
from ..utils.logger import setup_logger

class RelationshipRepository:
    def __init__(self):
        self.logger = setup_logger()

    def create_relationship(self, **fields):
        """Repository: Insert a dataset -> model edge"""
        try:
            relationship = Relationship(**fields)
            db.session.add(relationship)
            db.session.commit()
            self.logger.info(
                f"Repository: Created relationship {relationship.id} "
                f"(dataset {relationship.dataset_id} -> model {relationship.model_id})"
            )
            return relationship
        except Exception as e:
            db.session.rollback()
            self.logger.error(f"Repository: Failed to create relationship: {str(e)}")
            raise

    def list_relationships(self, dataset_id=None, model_id=None):
        """Repository: List relationships, optionally filtered by either end"""
        try:
            query = Relationship.query
            if dataset_id is not None:
                query = query.filter_by(dataset_id=dataset_id)
            if model_id is not None:
                query = query.filter_by(model_id=model_id)
            return query.order_by(Relationship.id).all()
        except Exception as e:
            self.logger.error(f"Repository: Failed to list relationships: {str(e)}")
            raise

    def get_relationship(self, relationship_id):
        try:
            return db.session.get(Relationship, relationship_id)
        except Exception as e:
            self.logger.error(f"Repository: Failed to get relationship {relationship_id}: {str(e)}")
            raise

    def update_status(self, relationship_id, status):
        """Repository: Set a relationship's status, returns None when it does not exist"""
        try:
            relationship = db.session.get(Relationship, relationship_id)
            if relationship is None:
                return None
            relationship.status = status
            db.session.commit()
            self.logger.info(f"Repository: Relationship {relationship_id} status -> {status}")
            return relationship
        except Exception as e:
            db.session.rollback()
            self.logger.error(f"Repository: Failed to update relationship {relationship_id}: {str(e)}")
            raise
