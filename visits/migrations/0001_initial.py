import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("scheduling", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Visit",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("timestamp", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("gps_latitude", models.FloatField(blank=True, null=True)),
                ("gps_longitude", models.FloatField(blank=True, null=True)),
                ("status", models.CharField(
                    choices=[("completed", "Completed"), ("edited", "Edited")],
                    default="completed",
                    max_length=12,
                )),
                ("notes", models.TextField(blank=True, default="")),
                ("brand", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="visits",
                    to="scheduling.brand",
                )),
                ("promoter", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="visits",
                    to="scheduling.promoter",
                )),
                ("store", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="visits",
                    to="scheduling.store",
                )),
            ],
            options={
                "ordering": ["-timestamp", "-id"],
                "indexes": [
                    models.Index(fields=["promoter", "timestamp"], name="visit_promoter_ts_idx"),
                    models.Index(fields=["brand", "store"], name="visit_brand_store_idx"),
                ],
            },
        ),
    ]
