from flask_restful import Resource

class HealthCheck(Resource):
    def get(self):
        """Controller: Check API health & list available routes"""
        routes = {
            "status": "healthy",
            "message": "Provenance API is running",
            "routes": {
                "/": "Health check & list all routes",
                "/api/auth/nonce": "Issue a wallet login nonce",
                "/api/auth/verify": "Verify a signed nonce",
                "/api/auth/status": "Wallet session status",
                "/api/auth/logout": "End wallet session",
                "/api/auth/register": "Register new user",
                "/api/auth/login": "Login user",
                "/api/auth/me": "Get current user info",
                "/api/datasets": "List or create datasets",
                "/api/datasets/<id>": "Get one dataset",
                "/api/datasets/<id>/status": "Update a dataset's status",
                "/api/models": "List or register models",
                "/api/models/<id>": "Get one model",
                "/api/relationships": "List or create dataset/model relationships",
                "/api/relationships/dataset/<id>": "Relationships of a dataset",
                "/api/relationships/model/<id>": "Relationships of a model",
                "/api/relationships/<id>/status": "Update a relationship's status",
                "/api/relationships/<id>/verify": "Verify a relationship's lineage",
                "/api/lineage/verify": "Verify a dataset -> model CID chain",
                "/api/validate/metadata": "Validate dataset upload metadata",
                "/api/ipfs/upload": "Upload files to IPFS/Filecoin",
                "/api/ipfs/uploads": "List pinned uploads",
                "/api/ipfs/check/<cid>": "Check whether a CID exists",
                "/api/ipfs/deal-status/<cid>": "Filecoin deal status for a CID",
            }
        }
        return routes, 200
