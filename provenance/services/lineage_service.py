# provenance/services/lineage_service.py
from ..utils.exceptions import UpstreamError
from ..utils.logger import setup_logger

class LineageService:
    """Decides whether a claimed dataset -> (processing) -> model chain is verified.

    A chain counts as verified when every CID in it resolves in the content
    store. Nothing checks that the model was actually derived from the data.
    """

    def __init__(self, content_repository):
        self.content_repository = content_repository
        self.logger = setup_logger()

    def _exists(self, cid):
        try:
            return bool(self.content_repository.exists(cid))
        except UpstreamError:
            raise
        except Exception as e:
            self.logger.error(f"Service: Existence check for {cid} failed: {str(e)}")
            raise UpstreamError(f"Could not check CID {cid}", cause=e)

    def verify(self, dataset_cid, processing_cid, model_cid):
        """Service: True only if the dataset, model and optional processing CIDs all exist"""
        if not self._exists(dataset_cid):
            self.logger.info(f"Service: Lineage unverified, dataset CID {dataset_cid} not found")
            return False
        if not self._exists(model_cid):
            self.logger.info(f"Service: Lineage unverified, model CID {model_cid} not found")
            return False
        if processing_cid and not self._exists(processing_cid):
            self.logger.info(f"Service: Lineage unverified, processing CID {processing_cid} not found")
            return False
        self.logger.info(f"Service: Lineage verified {dataset_cid} -> {processing_cid or '-'} -> {model_cid}")
        return True
