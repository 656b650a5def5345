# provenance/api/resources/auth.py
from flask import current_app, request, session
from flask_restful import Resource, reqparse
from flask_jwt_extended import jwt_required, get_jwt_identity
from ...services.auth_service import AuthService
from ...services.wallet_auth_service import AuthFailure, WalletAuthService
from ...utils.exceptions import AuthError, NotFoundError


def _wallet_auth_service():
    return WalletAuthService(current_app.extensions['nonce_repository'])


class Nonce(Resource):
    def get(self):
        """Controller: Issue a login nonce for a wallet address"""
        nonce = _wallet_auth_service().issue_nonce(request.args.get('address'))
        return {"nonce": nonce}, 200


class VerifySignature(Resource):
    def post(self):
        """Controller: Verify a signed nonce and open a wallet session"""
        parser = reqparse.RequestParser()
        parser.add_argument('address', type=str, location='json', required=True, help="Address is required")
        parser.add_argument('signature', type=str, location='json', required=True, help="Signature is required")
        parser.add_argument('message', type=str, location='json', required=True, help="Message is required")
        args = parser.parse_args()

        service = _wallet_auth_service()
        result = service.verify(args['address'], args['signature'], args['message'])
        if result.failure is AuthFailure.MISSING_NONCE:
            raise NotFoundError(result.message)
        if not result.authenticated:
            raise AuthError(result.message)

        service.establish_session(session, result)
        return {"authenticated": True, "address": result.address}, 200


class AuthStatus(Resource):
    def get(self):
        """Controller: Report the wallet session state"""
        return WalletAuthService.session_status(session), 200


class Logout(Resource):
    def post(self):
        """Controller: Drop the wallet session"""
        WalletAuthService.clear_session(session)
        return {"success": True}, 200


class Register(Resource):
    def post(self):
        """Controller: Register a new user"""
        parser = reqparse.RequestParser()
        parser.add_argument('username', type=str, location='json', required=True, help="Username is required")
        parser.add_argument('password', type=str, location='json', required=True, help="Password is required")
        args = parser.parse_args()

        user = AuthService().register(args['username'], args['password'])
        return {"message": "User registered successfully", "userId": user.id}, 201


class Login(Resource):
    def post(self):
        """Controller: Login and return JWT token"""
        parser = reqparse.RequestParser()
        parser.add_argument('username', type=str, location='json', required=True, help="Username is required")
        parser.add_argument('password', type=str, location='json', required=True, help="Password is required")
        args = parser.parse_args()

        token = AuthService().login(args['username'], args['password'])
        return {"accessToken": token}, 200


class CurrentUser(Resource):
    @jwt_required()
    def get(self):
        """Controller: Get current user info"""
        user = AuthService().get_user_by_id(int(get_jwt_identity()))
        return user.to_dict(), 200
