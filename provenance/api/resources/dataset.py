# provenance/api/resources/dataset.py
from flask_restful import Resource, reqparse
from ...services.dataset_service import DatasetService


class DatasetList(Resource):
    def get(self):
        """Controller: List datasets"""
        return [dataset.to_dict() for dataset in DatasetService().list_datasets()], 200

    def post(self):
        """Controller: Create a dataset record"""
        parser = reqparse.RequestParser()
        for field in ('name', 'cid', 'size', 'domain', 'format', 'license'):
            parser.add_argument(field, type=str, location='json', required=True, help=f"{field} is required")
        parser.add_argument('accessControl', type=str, location='json', default='public')
        parser.add_argument('description', type=str, location='json')
        parser.add_argument('tags', type=str, location='json', action='append')
        parser.add_argument('filesTotalCount', type=int, location='json', default=0)
        parser.add_argument('status', type=str, location='json', default='processing')
        parser.add_argument('userId', type=int, location='json')
        args = parser.parse_args()

        dataset = DatasetService().create_dataset(
            name=args['name'],
            cid=args['cid'],
            size=args['size'],
            domain=args['domain'],
            format=args['format'],
            license=args['license'],
            access_control=args['accessControl'],
            description=args['description'],
            tags=args['tags'],
            files_total_count=args['filesTotalCount'],
            status=args['status'],
            user_id=args['userId'],
        )
        return dataset.to_dict(), 201


class DatasetItem(Resource):
    def get(self, dataset_id):
        """Controller: Get one dataset"""
        return DatasetService().get_dataset(dataset_id).to_dict(), 200


class DatasetStatus(Resource):
    def patch(self, dataset_id):
        """Controller: Update a dataset's status"""
        parser = reqparse.RequestParser()
        parser.add_argument('status', type=str, location='json', required=True, help="Status is required")
        args = parser.parse_args()
        return DatasetService().update_status(dataset_id, args['status']).to_dict(), 200
