# provenance/services/wallet_auth_service.py
"""Wallet login by signed challenge.

A client asks for a nonce for its address, signs a message containing that
nonce with the wallet key (EIP-191 ``personal_sign``) and posts the message
and signature back. The signer is recovered from the signature and compared
with the claimed address; on a match the nonce is consumed and the Flask
session is marked authenticated.
"""
import secrets
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from eth_account import Account
from eth_account.messages import encode_defunct
from web3 import Web3

from ..utils.exceptions import ValidationError
from ..utils.logger import setup_logger

SESSION_AUTHENTICATED = 'authenticated'
SESSION_WALLET_ADDRESS = 'wallet_address'


class AuthFailure(Enum):
    MISSING_NONCE = 'MissingNonce'
    INVALID_NONCE = 'InvalidNonce'
    INVALID_SIGNATURE = 'InvalidSignature'
    SIGNATURE_MISMATCH = 'SignatureMismatch'


FAILURE_MESSAGES = {
    AuthFailure.MISSING_NONCE: 'No nonce found for this address or nonce expired',
    AuthFailure.INVALID_NONCE: 'Invalid nonce in message',
    AuthFailure.INVALID_SIGNATURE: 'Invalid signature',
    AuthFailure.SIGNATURE_MISMATCH: 'Signature verification failed',
}


@dataclass(frozen=True)
class WalletAuthResult:
    authenticated: bool
    address: Optional[str] = None
    failure: Optional[AuthFailure] = None

    @property
    def message(self):
        return FAILURE_MESSAGES.get(self.failure)


def recover_signer(message, signature):
    """Recover the address that produced ``signature`` over ``message``."""
    return Account.recover_message(encode_defunct(text=message), signature=signature)


class WalletAuthService:
    def __init__(self, nonce_repository):
        self.nonce_repository = nonce_repository
        self.logger = setup_logger()

    @staticmethod
    def _normalise(address):
        if not address or not isinstance(address, str):
            raise ValidationError("Address is required")
        if not Web3.is_address(address):
            raise ValidationError(f"Invalid wallet address: {address}")
        # Bare hex and upper-case forms map to the 0x-prefixed lowercase key
        return Web3.to_checksum_address(address).lower()

    def issue_nonce(self, address):
        """Service: Create a fresh nonce for ``address``, replacing any earlier one"""
        address = self._normalise(address)
        self.nonce_repository.purge_expired()
        nonce = secrets.token_hex(32)
        self.nonce_repository.put(address, nonce)
        self.logger.info(f"Service: Issued nonce for {address}")
        return nonce

    def verify(self, address, signature, message):
        """Service: Check a signed challenge, consuming the nonce on success.

        Failed attempts leave the nonce in place until it expires.
        """
        if not signature or not message:
            raise ValidationError("Address, signature, and message are required")
        address = self._normalise(address)

        stored_nonce = self.nonce_repository.get(address)
        if stored_nonce is None:
            return self._fail(address, AuthFailure.MISSING_NONCE)
        if stored_nonce not in message:
            return self._fail(address, AuthFailure.INVALID_NONCE)

        try:
            recovered = recover_signer(message, signature)
        except Exception as e:
            self.logger.warning(f"Service: Signature recovery failed for {address}: {str(e)}")
            return self._fail(address, AuthFailure.INVALID_SIGNATURE)

        if recovered.lower() != address:
            return self._fail(address, AuthFailure.SIGNATURE_MISMATCH)

        self.nonce_repository.delete(address)
        self.logger.info(f"Service: Wallet {address} authenticated")
        return WalletAuthResult(authenticated=True, address=address)

    def _fail(self, address, failure):
        self.logger.warning(f"Service: Wallet auth failed for {address}: {failure.value}")
        return WalletAuthResult(authenticated=False, address=address, failure=failure)

    @staticmethod
    def establish_session(session, result):
        session[SESSION_WALLET_ADDRESS] = result.address
        session[SESSION_AUTHENTICATED] = True

    @staticmethod
    def clear_session(session):
        session.pop(SESSION_WALLET_ADDRESS, None)
        session.pop(SESSION_AUTHENTICATED, None)

    @staticmethod
    def session_status(session):
        if session.get(SESSION_AUTHENTICATED) and session.get(SESSION_WALLET_ADDRESS):
            return {"authenticated": True, "address": session[SESSION_WALLET_ADDRESS]}
        return {"authenticated": False}
