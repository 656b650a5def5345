# provenance/repositories/nonce_repository.py
import threading
import time


class NonceRepository:
    """Process-wide map of wallet address -> pending login nonce.

    Entries expire after ``ttl_seconds``; expiry is enforced on read. Nothing
    is persisted, so a restart only forces clients to request a new nonce.
    Addresses are normalised to lowercase, and storing a nonce for an address
    replaces whatever was there before.
    """

    def __init__(self, ttl_seconds, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._nonces = {}
        self._lock = threading.Lock()

    def put(self, address, nonce):
        with self._lock:
            self._nonces[address.lower()] = (nonce, self._clock() + self.ttl_seconds)

    def get(self, address):
        """Return the live nonce for ``address`` or None."""
        key = address.lower()
        with self._lock:
            entry = self._nonces.get(key)
            if entry is None:
                return None
            nonce, expires_at = entry
            if self._clock() >= expires_at:
                del self._nonces[key]
                return None
            return nonce

    def delete(self, address):
        with self._lock:
            self._nonces.pop(address.lower(), None)

    def purge_expired(self):
        now = self._clock()
        with self._lock:
            expired = [key for key, (_, expires_at) in self._nonces.items() if now >= expires_at]
            for key in expired:
                del self._nonces[key]
        return len(expired)

    def __len__(self):
        return len(self._nonces)
