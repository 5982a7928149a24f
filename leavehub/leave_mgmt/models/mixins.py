from django.db import models


class TimeStampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class StatsSourceQuerySet(models.QuerySet):
    """
    QuerySet for tables that feed the org statistics snapshot.
    Django only signals per-object saves/deletes; the set-based statements below are
    reported here once per call so a bulk write counts as a single statement.
    """

    def update(self, **kwargs):
        rows = super().update(**kwargs)
        if rows:
            _report_statement(self.model, "update")
        return rows

    update.alters_data = True

    def bulk_create(self, objs, *args, **kwargs):
        created = super().bulk_create(objs, *args, **kwargs)
        if created:
            _report_statement(self.model, "insert")
        return created

    bulk_create.alters_data = True


def _report_statement(model, action: str) -> None:
    # imported lazily: triggers -> services -> models
    from leave_mgmt.triggers import source_statement_executed

    source_statement_executed(model, action)
