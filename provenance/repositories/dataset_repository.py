# provenance/repositories/dataset_repository.py
from ..core.database import Dataset
from .. import db
from ..utils.logger import setup_logger

class DatasetRepository:
    def __init__(self):
        self.logger = setup_logger()

    def create_dataset(self, **fields):
        """Repository: Insert a dataset row; the database allocates the ID"""
        try:
            dataset = Dataset(**fields)
            db.session.add(dataset)
            db.session.commit()
            self.logger.info(f"Repository: Created dataset {dataset.id} ({dataset.cid})")
            return dataset
        except Exception as e:
            db.session.rollback()
            self.logger.error(f"Repository: Failed to create dataset: {str(e)}")
            raise

    def list_datasets(self):
        """Repository: List datasets in ID order"""
        try:
            return Dataset.query.order_by(Dataset.id).all()
        except Exception as e:
            self.logger.error(f"Repository: Failed to list datasets: {str(e)}")
            raise

    def get_dataset(self, dataset_id):
        """Repository: Get dataset by ID"""
        try:
            return db.session.get(Dataset, dataset_id)
        except Exception as e:
            self.logger.error(f"Repository: Failed to get dataset {dataset_id}: {str(e)}")
            raise

    def cid_exists(self, cid):
        try:
            return db.session.query(Dataset.query.filter_by(cid=cid).exists()).scalar()
        except Exception as e:
            self.logger.error(f"Repository: Failed to look up dataset CID {cid}: {str(e)}")
            raise

    def update_status(self, dataset_id, status):
        """Repository: Set a dataset's status, returns None when it does not exist"""
        try:
            dataset = db.session.get(Dataset, dataset_id)
            if dataset is None:
                return None
            dataset.status = status
            db.session.commit()
            self.logger.info(f"Repository: Dataset {dataset_id} status -> {status}")
            return dataset
        except Exception as e:
            db.session.rollback()
            self.logger.error(f"Repository: Failed to update dataset {dataset_id}: {str(e)}")
            raise
