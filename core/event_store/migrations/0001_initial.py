import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="StoredEvent",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "event_id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique event identifier.",
                        unique=True,
                    ),
                ),
                (
                    "event_type",
                    models.CharField(
                        help_text="Namespaced, versioned type (e.g. hotel.guest_stay.checked_in.v1).",
                        max_length=255,
                    ),
                ),
                (
                    "stream_id",
                    models.CharField(
                        help_text="Aggregate stream, e.g. a guest stay account id.",
                        max_length=512,
                    ),
                ),
                (
                    "stream_position",
                    models.PositiveIntegerField(
                        help_text="1-based position of this event inside its stream.",
                    ),
                ),
                ("payload", models.JSONField()),
                (
                    "recorded_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        help_text="When the store persisted this event.",
                    ),
                ),
            ],
            options={
                "db_table": "folio_event_store",
                "ordering": ["stream_id", "stream_position"],
            },
        ),
        migrations.AddConstraint(
            model_name="storedevent",
            constraint=models.UniqueConstraint(
                fields=("stream_id", "stream_position"),
                name="uq_evt_stream_position",
            ),
        ),
        migrations.AddIndex(
            model_name="storedevent",
            index=models.Index(fields=["event_type"], name="idx_evt_type"),
        ),
    ]
