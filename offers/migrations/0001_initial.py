from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Offer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.TextField(help_text="Headline shown to visitors.")),
                ("description", models.TextField(blank=True, null=True)),
                ("is_active", models.BooleanField(db_index=True, default=False, help_text="If false, hidden from the public listing.")),
                ("start_at", models.DateTimeField(blank=True, help_text="Visible from (inclusive).", null=True)),
                ("end_at", models.DateTimeField(blank=True, help_text="Visible until (inclusive).", null=True)),
                ("thumbnail_path", models.CharField(blank=True, max_length=500, null=True)),
                ("pdf_path", models.CharField(blank=True, max_length=500, null=True)),
                ("created_at", models.DateTimeField(db_index=True)),
                ("updated_at", models.DateTimeField()),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["start_at", "end_at"], name="offers_window_idx")],
            },
        ),
    ]
