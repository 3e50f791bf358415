from django.conf import settings


class TrackerRouter(object):
    """
    The DB router used by the marcindex project. Models from the
    `indexer` app (i.e. the change tracker) live in the tracker
    database; everything else lives in the default database.
    """
    tracker_app_labels = ('indexer',)

    @property
    def tracker_db(self):
        return getattr(settings, 'INDEXER_TRACKER_DATABASE', 'tracker')

    def is_tracker_app(self, app_label):
        return app_label in self.tracker_app_labels

    def db_for_read(self, model, **hints):
        """
        Routes reads for indexer models to the tracker DB.
        """
        if self.is_tracker_app(model._meta.app_label):
            return self.tracker_db
        return 'default'

    def db_for_write(self, model, **hints):
        """
        Routes writes for indexer models to the tracker DB.
        """
        if self.is_tracker_app(model._meta.app_label):
            return self.tracker_db
        return 'default'

    def allow_relation(self, obj1, obj2, **hints):
        """
        Only allow relations between objects in the same DB.
        """
        return (self.is_tracker_app(obj1._meta.app_label) ==
                self.is_tracker_app(obj2._meta.app_label))

    def allow_migrate(self, db, app_label, model_name=None, **hints):
        """
        Indexer tables only go into the tracker DB, and nothing else
        does.
        """
        if self.is_tracker_app(app_label):
            return db == self.tracker_db
        return db == 'default'
