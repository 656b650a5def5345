# provenance/services/storage_service.py
import json
import math
import os

from werkzeug.utils import secure_filename

from .dataset_service import DatasetService
from ..repositories.upload_repository import UploadRepository
from ..utils.exceptions import UpstreamError, ValidationError
from ..utils.logger import setup_logger

SIZE_UNITS = ['Bytes', 'KB', 'MB', 'GB', 'TB']
REQUIRED_METADATA_FIELDS = ('name', 'domain', 'format', 'license', 'accessControl')
DEFAULT_USER_ID = 1


def format_file_size(num_bytes):
    """Human readable size, base 1024, at most two decimals ("1.5 MB")."""
    if num_bytes <= 0:
        return '0 Bytes'
    i = min(int(math.floor(math.log(num_bytes, 1024))), len(SIZE_UNITS) - 1)
    value = f"{num_bytes / math.pow(1024, i):.2f}".rstrip('0').rstrip('.')
    return f"{value} {SIZE_UNITS[i]}"


def validate_metadata(metadata):
    """Check dataset upload metadata, raising ValidationError listing bad fields."""
    if not isinstance(metadata, dict):
        raise ValidationError("Invalid metadata: expected a JSON object")
    errors = {}
    for field in REQUIRED_METADATA_FIELDS:
        value = metadata.get(field)
        if not isinstance(value, str) or not value.strip():
            errors[field] = f"{field} is required"
    if metadata.get('description') is not None and not isinstance(metadata['description'], str):
        errors['description'] = "description must be a string"
    tags = metadata.get('tags')
    if tags is not None and (not isinstance(tags, list) or not all(isinstance(t, str) for t in tags)):
        errors['tags'] = "tags must be a list of strings"
    if errors:
        raise ValidationError(f"Invalid metadata: {json.dumps(errors, sort_keys=True)}")
    return metadata


class StorageService:
    def __init__(self, content_repository, upload_dir):
        self.content_repository = content_repository
        self.upload_repository = UploadRepository(upload_dir)
        self.logger = setup_logger()

    @staticmethod
    def parse_metadata(raw):
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid metadata JSON: {str(e)}")

    def upload(self, files, name=None, raw_metadata=None):
        """Service: Pin uploaded files and record a dataset for them.

        The first CID the content store returns identifies the whole upload.
        When metadata is supplied it is pinned alongside as ``metadata.json``
        and a dataset row is created from it.
        """
        if not files:
            raise ValidationError("No files uploaded")

        metadata = self.parse_metadata(raw_metadata) if raw_metadata else None
        if metadata is not None and not isinstance(metadata, dict):
            raise ValidationError("Invalid metadata JSON: expected an object")

        saved = []
        try:
            for file in files:
                filename = secure_filename(file.filename or '') or 'upload.bin'
                saved.append((filename, self.upload_repository.save_file(file, filename)))
            if metadata is not None:
                saved.append(('metadata.json', self.upload_repository.save_metadata(metadata)))

            self.logger.info(f"Service: Processing {len(saved)} files for upload")
            cid, total_size, last_error = None, 0, None
            for filename, path in saved:
                total_size += os.path.getsize(path)
                try:
                    result = self.content_repository.upload(path, name or filename)
                except Exception as e:
                    self.logger.error(f"Service: Error uploading file {filename}: {str(e)}")
                    last_error = e
                    continue
                if not cid and result.get('cid'):
                    cid = result['cid']
                    self.logger.info(f"Service: Got CID {cid}")
        finally:
            for _, path in saved:
                self.upload_repository.remove(path)

        if not cid:
            raise UpstreamError("Failed to get CID from content store", cause=last_error)

        size = format_file_size(total_size)
        if metadata is not None:
            self._record_dataset(cid, size, len(saved), name, metadata)
        return {"cid": cid, "size": size}

    def _record_dataset(self, cid, size, files_total_count, name, metadata):
        # The CID is already pinned, so a failed insert must not fail the upload
        try:
            DatasetService().create_dataset(
                name=metadata.get('name') or name or "Unnamed Dataset",
                cid=cid,
                size=size,
                domain=metadata.get('domain') or "General",
                format=metadata.get('format') or "Unknown",
                license=metadata.get('license') or "Unknown",
                access_control=metadata.get('accessControl') or "public",
                description=metadata.get('description') or "",
                tags=metadata.get('tags') or [],
                files_total_count=files_total_count,
                status='verified',
                user_id=DEFAULT_USER_ID,
            )
        except Exception as e:
            self.logger.error(f"Service: Error creating dataset record for {cid}: {str(e)}")

    def list_uploads(self):
        return self.content_repository.list_uploads()

    def exists(self, cid):
        exists = bool(self.content_repository.exists(cid))
        self.logger.info(f"Service: CID {cid} exists: {exists}")
        return exists

    def deal_status(self, cid):
        return self.content_repository.deal_status(cid)
