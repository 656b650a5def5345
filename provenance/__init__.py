from flask import Flask
from flask_restful import Api
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from .config.settings import Config
from .utils.logger import setup_logger
from .utils.exceptions import handle_api_error

db = SQLAlchemy()
jwt = JWTManager()


def build_content_repository(config, logger):
    from .repositories.content_repository import LighthouseRepository, LocalContentRepository

    if not config.get('LIGHTHOUSE_API_KEY'):
        logger.warning("No Lighthouse API key found, using local content store")
        return LocalContentRepository()
    return LighthouseRepository(
        config['LIGHTHOUSE_API_KEY'],
        config['LIGHTHOUSE_API_URL'],
        config['LIGHTHOUSE_NODE_URL'],
        timeout=config['LIGHTHOUSE_TIMEOUT'],
    )


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.config['MAX_CONTENT_LENGTH'] = app.config['MAX_UPLOAD_SIZE']

    # Wallet sessions ride on the cookie, so credentials must be allowed
    CORS(app, resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}}, supports_credentials=True)

    # Initialize extensions
    db.init_app(app)
    jwt.init_app(app)
    api = Api(app)

    # Setup logger
    logger = setup_logger()
    logger.info("Initializing provenance backend")

    # Register error handler
    app.errorhandler(Exception)(handle_api_error)

    # Process-wide stores shared by every request
    from .repositories.nonce_repository import NonceRepository
    app.extensions['nonce_repository'] = NonceRepository(app.config['NONCE_TTL_SECONDS'])
    app.extensions['content_repository'] = build_content_repository(app.config, logger)

    # Register API resources
    from .api.resources.health import HealthCheck
    from .api.resources.auth import Nonce, VerifySignature, AuthStatus, Logout, Register, Login, CurrentUser
    from .api.resources.dataset import DatasetList, DatasetItem, DatasetStatus
    from .api.resources.model import ModelList, ModelItem
    from .api.resources.relationship import (
        RelationshipList, RelationshipsByDataset, RelationshipsByModel, RelationshipStatus, RelationshipVerify,
    )
    from .api.resources.lineage import LineageVerify
    from .api.resources.ipfs import IpfsUpload, IpfsUploads, IpfsCheck, IpfsDealStatus, ValidateMetadata

    api.add_resource(HealthCheck, '/')
    api.add_resource(Nonce, '/api/auth/nonce')
    api.add_resource(VerifySignature, '/api/auth/verify')
    api.add_resource(AuthStatus, '/api/auth/status')
    api.add_resource(Logout, '/api/auth/logout')
    api.add_resource(Register, '/api/auth/register')
    api.add_resource(Login, '/api/auth/login')
    api.add_resource(CurrentUser, '/api/auth/me')
    api.add_resource(DatasetList, '/api/datasets')
    api.add_resource(DatasetItem, '/api/datasets/<int:dataset_id>')
    api.add_resource(DatasetStatus, '/api/datasets/<int:dataset_id>/status')
    api.add_resource(ModelList, '/api/models')
    api.add_resource(ModelItem, '/api/models/<int:model_id>')
    api.add_resource(RelationshipList, '/api/relationships')
    api.add_resource(RelationshipsByDataset, '/api/relationships/dataset/<int:dataset_id>')
    api.add_resource(RelationshipsByModel, '/api/relationships/model/<int:model_id>')
    api.add_resource(RelationshipStatus, '/api/relationships/<int:relationship_id>/status')
    api.add_resource(RelationshipVerify, '/api/relationships/<int:relationship_id>/verify')
    api.add_resource(LineageVerify, '/api/lineage/verify')
    api.add_resource(ValidateMetadata, '/api/validate/metadata')
    api.add_resource(IpfsUpload, '/api/ipfs/upload')
    api.add_resource(IpfsUploads, '/api/ipfs/uploads')
    api.add_resource(IpfsCheck, '/api/ipfs/check/<string:cid>')
    api.add_resource(IpfsDealStatus, '/api/ipfs/deal-status/<string:cid>')

    # Initialize database and the demo account
    from .core import database  # noqa: F401  registers the models
    from .services.auth_service import AuthService
    with app.app_context():
        db.create_all()
        AuthService().ensure_demo_user()

    return app
