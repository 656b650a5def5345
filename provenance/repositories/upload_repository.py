# provenance/repositories/upload_repository.py
import json
import os
import uuid


class UploadRepository:
    def __init__(self, upload_dir):
        self.upload_dir = upload_dir

    def _unique_path(self, filename):
        if not os.path.exists(self.upload_dir):
            os.makedirs(self.upload_dir)
        # Generate unique filename to avoid conflicts
        return os.path.join(self.upload_dir, f"{uuid.uuid4().hex}_{filename}")

    def save_file(self, file, filename):
        file_path = self._unique_path(filename)
        file.save(file_path)
        return file_path

    def save_metadata(self, metadata):
        file_path = self._unique_path('metadata.json')
        with open(file_path, 'w') as f:
            json.dump(metadata, f, indent=2)
        return file_path

    def remove(self, file_path):
        if os.path.exists(file_path):
            os.remove(file_path)
