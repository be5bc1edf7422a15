import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Brand",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=160)),
                ("visit_frequency", models.PositiveIntegerField(default=1)),
                ("price_per_visit", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("agency", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="%(app_label)s_%(class)s_set",
                    to="tenants.agency",
                )),
            ],
            options={
                "ordering": ["name", "id"],
                "indexes": [models.Index(fields=["agency", "name"], name="brand_agency_name_idx")],
            },
        ),
        migrations.CreateModel(
            name="Store",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("chain_name", models.CharField(max_length=160)),
                ("type", models.CharField(
                    choices=[("retail", "Retail"), ("wholesale", "Wholesale")],
                    default="retail",
                    max_length=12,
                )),
                ("address", models.CharField(blank=True, default="", max_length=255)),
                ("gps_latitude", models.FloatField(blank=True, null=True)),
                ("gps_longitude", models.FloatField(blank=True, null=True)),
                ("radius_meters", models.PositiveIntegerField(default=100)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("agency", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="%(app_label)s_%(class)s_set",
                    to="tenants.agency",
                )),
            ],
            options={
                "ordering": ["chain_name", "id"],
                "indexes": [models.Index(fields=["agency", "chain_name"], name="store_agency_chain_idx")],
            },
        ),
        migrations.CreateModel(
            name="BrandStore",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("visit_frequency", models.PositiveIntegerField(blank=True, null=True)),
                ("brand", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="store_links",
                    to="scheduling.brand",
                )),
                ("store", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="brand_links",
                    to="scheduling.store",
                )),
            ],
            options={
                "unique_together": {("brand", "store")},
            },
        ),
        migrations.CreateModel(
            name="Promoter",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=160)),
                ("phone", models.CharField(blank=True, default="", max_length=32)),
                ("city", models.CharField(blank=True, default="", max_length=120)),
                ("active", models.BooleanField(db_index=True, default=True)),
                ("availability_days", models.JSONField(blank=True, default=list)),
                ("visit_frequency_per_brand", models.JSONField(blank=True, default=dict)),
                ("payment_per_visit", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.OneToOneField(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="promoter",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                "ordering": ["name", "id"],
            },
        ),
        migrations.CreateModel(
            name="PromoterBrand",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("brand", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="promoter_auths",
                    to="scheduling.brand",
                )),
                ("promoter", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="brand_auths",
                    to="scheduling.promoter",
                )),
            ],
            options={
                "unique_together": {("promoter", "brand")},
            },
        ),
        migrations.CreateModel(
            name="PromoterStore",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("promoter", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="store_auths",
                    to="scheduling.promoter",
                )),
                ("store", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="promoter_auths",
                    to="scheduling.store",
                )),
            ],
            options={
                "unique_together": {("promoter", "store")},
            },
        ),
        migrations.AddField(
            model_name="promoter",
            name="brands",
            field=models.ManyToManyField(
                related_name="promoters", through="scheduling.PromoterBrand", to="scheduling.brand"
            ),
        ),
        migrations.AddField(
            model_name="promoter",
            name="stores",
            field=models.ManyToManyField(
                related_name="promoters", through="scheduling.PromoterStore", to="scheduling.store"
            ),
        ),
        migrations.CreateModel(
            name="Allocation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("days_of_week", models.JSONField(default=list)),
                ("frequency_per_week", models.PositiveSmallIntegerField(default=1)),
                ("active", models.BooleanField(db_index=True, default=True)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("brand", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="allocations",
                    to="scheduling.brand",
                )),
                ("promoter", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="allocations",
                    to="scheduling.promoter",
                )),
                ("store", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="allocations",
                    to="scheduling.store",
                )),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["promoter", "brand", "store"], name="alloc_triple_idx"),
                    models.Index(fields=["promoter", "active"], name="alloc_promoter_active_idx"),
                ],
            },
        ),
    ]
