# provenance/repositories/content_repository.py
import hashlib
import os
import threading
from datetime import datetime, timedelta

import requests

from .dataset_repository import DatasetRepository
from ..utils.exceptions import UpstreamError
from ..utils.logger import setup_logger


class LighthouseRepository:
    """Content store backed by the Lighthouse IPFS/Filecoin pinning API."""

    def __init__(self, api_key, api_url, node_url, timeout=60):
        self.api_key = api_key
        self.api_url = api_url.rstrip('/')
        self.node_url = node_url.rstrip('/')
        self.timeout = timeout
        self.logger = setup_logger()

    def _headers(self):
        return {'Authorization': f'Bearer {self.api_key}'}

    def _request(self, method, url, **kwargs):
        try:
            response = requests.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            self.logger.error(f"Repository: Lighthouse request to {url} failed: {str(e)}")
            raise UpstreamError("Lighthouse is unreachable", cause=e)
        if not response.ok:
            self.logger.error(f"Repository: Lighthouse returned {response.status_code}: {response.text}")
            raise UpstreamError(f"Lighthouse returned HTTP {response.status_code}", cause=response.text)
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError("Lighthouse returned a non-JSON response", cause=e)

    def upload(self, file_path, name=None):
        """Repository: Pin one file, returns {cid, name, size}"""
        file_name = name or os.path.basename(file_path)
        with open(file_path, 'rb') as f:
            data = self._request(
                'POST',
                f"{self.node_url}/api/v0/add",
                headers=self._headers(),
                files={'file': (file_name, f)},
            )
        self.logger.info(f"Repository: Pinned {file_name} as {data.get('Hash')}")
        return {
            "cid": data.get('Hash'),
            "name": data.get('Name', file_name),
            "size": int(data.get('Size', 0)),
        }

    def _iter_uploads(self):
        last_key = None
        while True:
            params = {'lastKey': last_key} if last_key else {}
            page = self._request(
                'GET',
                f"{self.api_url}/api/user/files_uploaded",
                headers=self._headers(),
                params=params,
            )
            files = page.get('fileList') or []
            yield from files
            if not files or not files[-1].get('id'):
                return
            last_key = files[-1]['id']

    def list_uploads(self):
        file_list = list(self._iter_uploads())
        return {"totalFiles": len(file_list), "fileList": file_list}

    def exists(self, cid):
        return any(item.get('cid') == cid for item in self._iter_uploads())

    def deal_status(self, cid):
        data = self._request(
            'GET',
            f"{self.api_url}/api/lighthouse/deal_status",
            params={'cid': cid},
        )
        return {"dealStatus": data if isinstance(data, list) else data.get('dealStatus', data)}


class LocalContentRepository:
    """In-process stand-in for the pinning service, used without an API key.

    CIDs are derived from the file digest. A CID named by a dataset row also
    counts as present; model and processing CIDs only count once uploaded here.
    """

    def __init__(self):
        self.logger = setup_logger()
        self._uploads = {}
        self._lock = threading.Lock()

    def upload(self, file_path, name=None):
        file_name = name or os.path.basename(file_path)
        digest = hashlib.sha256()
        with open(file_path, 'rb') as f:
            for chunk in iter(lambda: f.read(1024 * 1024), b''):
                digest.update(chunk)
        size = os.path.getsize(file_path)
        cid = f"local-{digest.hexdigest()}"
        with self._lock:
            self._uploads[cid] = {
                "cid": cid,
                "fileName": file_name,
                "fileSizeInBytes": size,
                "createdAt": datetime.utcnow().isoformat(),
                "mimeType": "application/octet-stream",
            }
        self.logger.info(f"Repository: Stored {file_name} locally as {cid}")
        return {"cid": cid, "name": file_name, "size": size}

    def list_uploads(self):
        with self._lock:
            file_list = list(self._uploads.values())
        known = {item['cid'] for item in file_list}
        for dataset in DatasetRepository().list_datasets():
            if dataset.cid in known:
                continue
            file_list.append({
                "cid": dataset.cid,
                "fileName": dataset.name,
                "fileSizeInBytes": None,
                "createdAt": dataset.uploaded_at.isoformat() if dataset.uploaded_at else None,
                "mimeType": "application/octet-stream",
                "status": dataset.status,
            })
        return {"totalFiles": len(file_list), "fileList": file_list}

    def exists(self, cid):
        with self._lock:
            if cid in self._uploads:
                return True
        return DatasetRepository().cid_exists(cid)

    def deal_status(self, cid):
        now = datetime.utcnow()
        return {
            "dealStatus": [
                {
                    "dealId": f"local-deal-{int(now.timestamp())}",
                    "storageProvider": "t01000",
                    "status": "Active",
                    "pieceCid": cid,
                    "dataCid": cid,
                    "dataModelSelector": "Links/0/Links/0/Links",
                    "activation": now.isoformat(),
                    "expiration": (now + timedelta(days=30)).isoformat(),
                    "created": now.isoformat(),
                    "updated": now.isoformat(),
                }
            ]
        }
