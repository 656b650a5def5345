# provenance/api/resources/relationship.py
from flask import current_app
from flask_restful import Resource, reqparse
from ...services.lineage_service import LineageService
from ...services.relationship_service import RelationshipService


def _relationship_service():
    return RelationshipService(LineageService(current_app.extensions['content_repository']))


class RelationshipList(Resource):
    def get(self):
        """Controller: List every dataset -> model relationship"""
        return [r.to_dict() for r in _relationship_service().list_relationships()], 200

    def post(self):
        """Controller: Record that a model was trained on a dataset"""
        parser = reqparse.RequestParser()
        parser.add_argument('datasetId', type=int, location='json', required=True, help="datasetId is required")
        parser.add_argument('modelId', type=int, location='json', required=True, help="modelId is required")
        parser.add_argument('licensingInfo', type=str, location='json', required=True,
                            help="licensingInfo is required")
        parser.add_argument('processingCid', type=str, location='json')
        parser.add_argument('status', type=str, location='json', default='processing')
        args = parser.parse_args()

        relationship = _relationship_service().create_relationship(
            args['datasetId'],
            args['modelId'],
            args['licensingInfo'],
            processing_cid=args['processingCid'],
            status=args['status'],
        )
        return relationship.to_dict(), 201


class RelationshipsByDataset(Resource):
    def get(self, dataset_id):
        relationships = _relationship_service().list_relationships(dataset_id=dataset_id)
        return [r.to_dict() for r in relationships], 200


class RelationshipsByModel(Resource):
    def get(self, model_id):
        relationships = _relationship_service().list_relationships(model_id=model_id)
        return [r.to_dict() for r in relationships], 200


class RelationshipStatus(Resource):
    def patch(self, relationship_id):
        """Controller: Update a relationship's status"""
        parser = reqparse.RequestParser()
        parser.add_argument('status', type=str, location='json', required=True, help="Status is required")
        args = parser.parse_args()
        return _relationship_service().update_status(relationship_id, args['status']).to_dict(), 200


class RelationshipVerify(Resource):
    def post(self, relationship_id):
        """Controller: Check a relationship's lineage against the content store"""
        verified, relationship = _relationship_service().verify_relationship(relationship_id)
        return {"verified": verified, "relationship": relationship.to_dict()}, 200
