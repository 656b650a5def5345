# provenance/api/resources/lineage.py
from flask import current_app
from flask_restful import Resource, reqparse
from ...services.lineage_service import LineageService


class LineageVerify(Resource):
    def post(self):
        """Controller: Verify an ad-hoc dataset -> (processing) -> model CID chain"""
        parser = reqparse.RequestParser()
        parser.add_argument('datasetCid', type=str, location='json', required=True, help="datasetCid is required")
        parser.add_argument('modelCid', type=str, location='json', required=True, help="modelCid is required")
        parser.add_argument('processingCid', type=str, location='json')
        args = parser.parse_args()

        service = LineageService(current_app.extensions['content_repository'])
        verified = service.verify(args['datasetCid'], args['processingCid'], args['modelCid'])
        return {"verified": verified}, 200
