from django.db import models

from app.core.models import TimestampedModel


class Industry(TimestampedModel):
    """
    Canonical industry list. Prospect records reference industries by id
    inside JSON tag lists, so the primary key stays an integer.
    """

    name = models.CharField(max_length=255)
    status = models.BooleanField(default=True)

    class Meta:
        db_table = "industries"
        ordering = ["name"]
        verbose_name_plural = "industries"

    def __str__(self):
        return self.name
