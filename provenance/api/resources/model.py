# provenance/api/resources/model.py
from flask_restful import Resource, reqparse
from ...services.model_service import ModelService


class ModelList(Resource):
    def get(self):
        """Controller: List registered models"""
        return [model.to_dict() for model in ModelService().list_models()], 200

    def post(self):
        """Controller: Register a trained model"""
        parser = reqparse.RequestParser()
        parser.add_argument('name', type=str, location='json', required=True, help="Model name is required")
        parser.add_argument('cid', type=str, location='json', required=True, help="Model CID is required")
        parser.add_argument('architecture', type=str, location='json')
        parser.add_argument('description', type=str, location='json')
        parser.add_argument('userId', type=int, location='json')
        args = parser.parse_args()

        model = ModelService().register_model(
            args['name'],
            args['cid'],
            architecture=args['architecture'],
            description=args['description'],
            user_id=args['userId'],
        )
        return model.to_dict(), 201


class ModelItem(Resource):
    def get(self, model_id):
        """Controller: Get one model"""
        return ModelService().get_model(model_id).to_dict(), 200
