# provenance/services/dataset_service.py
from ..core.database import ACCESS_CONTROLS, DATASET_STATUSES
from ..repositories.dataset_repository import DatasetRepository
from ..utils.exceptions import NotFoundError, ValidationError
from ..utils.logger import setup_logger

class DatasetService:
    def __init__(self):
        self.repository = DatasetRepository()
        self.logger = setup_logger()

    def list_datasets(self):
        """Service: List all datasets"""
        datasets = self.repository.list_datasets()
        self.logger.info(f"Service: Retrieved {len(datasets)} datasets")
        return datasets

    def get_dataset(self, dataset_id):
        """Service: Get a dataset or raise NotFoundError"""
        dataset = self.repository.get_dataset(dataset_id)
        if dataset is None:
            raise NotFoundError("Dataset not found")
        return dataset

    def create_dataset(self, name, cid, size, domain, format, license, access_control='public',
                       description=None, tags=None, files_total_count=0, status='processing', user_id=None):
        """Service: Validate and persist a dataset record"""
        if access_control not in ACCESS_CONTROLS:
            raise ValidationError(f"Invalid access control: {access_control}")
        if status not in DATASET_STATUSES:
            raise ValidationError(f"Invalid dataset status: {status}")
        try:
            dataset = self.repository.create_dataset(
                name=name,
                cid=cid,
                size=size,
                domain=domain,
                format=format,
                license=license,
                access_control=access_control,
                description=description,
                tags=list(tags or []),
                files_total_count=files_total_count or 0,
                status=status,
                user_id=user_id,
            )
            self.logger.info(f"Service: Created dataset {dataset.id}")
            return dataset
        except Exception as e:
            self.logger.error(f"Service: Failed to create dataset: {str(e)}")
            raise

    def update_status(self, dataset_id, status):
        """Service: Move a dataset to another status"""
        if status not in DATASET_STATUSES:
            raise ValidationError(f"Invalid dataset status: {status}")
        dataset = self.repository.update_status(dataset_id, status)
        if dataset is None:
            raise NotFoundError("Dataset not found")
        return dataset
