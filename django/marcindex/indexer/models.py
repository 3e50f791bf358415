"""
Contains models for the indexer app.
"""
from django.db import models


class ChangeTrackerManager(models.Manager):

    def record_transaction(self, core, record_id, latest_transaction, now):
        """
        Note that the record identified by `core` and `record_id` is
        being indexed at `now`, having last changed at
        `latest_transaction`. Must be called inside a transaction; the
        record's row is locked until the transaction ends.

        A record seen for the first time gets a new row with first
        and last indexed dates of `now`. A known record only gets a new
        last indexed date if it has changed since it was last indexed
        or if it had been marked deleted. The first indexed date never
        changes.

        Returns a (tracker, changed) tuple, where `changed` is True if
        the row was created or updated.
        """
        tracker, created = self.select_for_update().get_or_create(
            core=core, record_id=record_id, defaults={
                'first_indexed': now,
                'last_indexed': now,
                'last_record_change': latest_transaction,
            })
        if created:
            return tracker, True

        if (tracker.last_record_change != latest_transaction or
                tracker.deleted is not None):
            tracker.last_indexed = now
            tracker.last_record_change = latest_transaction
            tracker.deleted = None
            tracker.save(update_fields=['last_indexed', 'last_record_change',
                                        'deleted'])
            return tracker, True
        return tracker, False


class ChangeTracker(models.Model):
    """
    When each record was first indexed and last indexed (i.e., last
    indexed after a change), kept outside the search index so it
    survives index rebuilds. `deleted` is set by whatever process
    removes records from the index.
    """
    core = models.CharField(max_length=30)
    record_id = models.CharField(max_length=120)
    first_indexed = models.DateTimeField()
    last_indexed = models.DateTimeField()
    last_record_change = models.DateTimeField()
    deleted = models.DateTimeField(null=True, blank=True)

    objects = ChangeTrackerManager()

    class Meta:
        db_table = 'change_tracker'
        unique_together = (('core', 'record_id'),)

    def __str__(self):
        return '{}:{}'.format(self.core, self.record_id)
