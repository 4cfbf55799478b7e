"""
Snapshot category, brand and size on movements.
"""

from django.db import migrations, models


class Migration(migrations.Migration):
    """Keep the catalog grouping of a movement after the product is edited."""

    dependencies = [
        ('stockroom', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='movement',
            name='category',
            field=models.CharField(blank=True, db_index=True, max_length=100, null=True, verbose_name='Category'),
        ),
        migrations.AddField(
            model_name='movement',
            name='brand',
            field=models.CharField(blank=True, max_length=100, null=True, verbose_name='Brand'),
        ),
        migrations.AddField(
            model_name='movement',
            name='sizes',
            field=models.CharField(blank=True, max_length=100, null=True, verbose_name='Size'),
        ),
    ]
