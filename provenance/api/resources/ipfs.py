# provenance/api/resources/ipfs.py
from flask import current_app, request
from flask_restful import Resource
from ...services.storage_service import StorageService, validate_metadata


def _storage_service():
    return StorageService(current_app.extensions['content_repository'], current_app.config['UPLOAD_DIR'])


class IpfsUpload(Resource):
    def post(self):
        """Controller: Pin uploaded files, returns the CID and total size"""
        files = [f for f in request.files.getlist('files') if f and f.filename]
        result = _storage_service().upload(
            files,
            name=request.form.get('name'),
            raw_metadata=request.form.get('metadata'),
        )
        return result, 200


class IpfsUploads(Resource):
    def get(self):
        return _storage_service().list_uploads(), 200


class IpfsCheck(Resource):
    def get(self, cid):
        """Controller: Does the content store know this CID"""
        return {"exists": _storage_service().exists(cid)}, 200


class IpfsDealStatus(Resource):
    def get(self, cid):
        return _storage_service().deal_status(cid), 200


class ValidateMetadata(Resource):
    def post(self):
        """Controller: Validate dataset upload metadata"""
        validate_metadata(request.get_json(silent=True))
        return {"valid": True}, 200
