from pymongo import MongoClient
from pymongo.errors import PyMongoError
from flask import current_app


class Database:
    """
    Thin holder around the MongoDB client shared by the whole app.
    Tests hand in a mongomock client instead of a real connection.
    """

    def __init__(self, app=None, client=None):
        self.client = client
        self.db = None
        if app is not None:
            self.init_app(app, client)

    def init_app(self, app, client=None):
        if client is not None:
            self.client = client
        if self.client is None:
            self.client = MongoClient(
                app.config['MONGO_URI'],
                serverSelectionTimeoutMS=5000,
                connect=False,
            )
        self.db = self.client[app.config.get('MONGO_DB_NAME') or 'reelfolio']
        app.extensions['reelfolio_db'] = self
        return self

    @property
    def projects(self):
        return self.db[current_app.config.get('PROJECTS_COLLECTION', 'projects')]

    @property
    def logs(self):
        return self.db[current_app.config.get('LOGS_COLLECTION', 'app_logs')]

    def ping(self):
        """Return (ok, error_message) for the health endpoint"""
        try:
            self.db.command('ping')
            return True, None
        except PyMongoError as e:
            return False, str(e)

    @staticmethod
    def connect():
        """Return the Database bound to the current app"""
        return current_app.extensions['reelfolio_db']
