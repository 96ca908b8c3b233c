from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('model_ref', models.CharField(max_length=50, verbose_name='Код моделі')),
                ('color', models.CharField(blank=True, default='', max_length=100, verbose_name='Колір')),
                ('item_code', models.CharField(blank=True, default='', max_length=100)),
                ('collection', models.CharField(blank=True, default='', max_length=100)),
                ('category', models.CharField(blank=True, default='', max_length=50)),
                ('subcategory', models.CharField(blank=True, default='', max_length=100)),
                ('brand', models.CharField(blank=True, default='', max_length=100)),
                ('gender', models.CharField(blank=True, default='', max_length=50)),
                ('supplier', models.CharField(blank=True, default='', max_length=100)),
                ('product_name', models.CharField(blank=True, default='', max_length=255)),
                ('size', models.CharField(blank=True, default='', max_length=100)),
                ('price_retail', models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ('price_wholesale', models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ('stock_quantity', models.IntegerField(default=0, verbose_name='Залишок')),
                ('image_url', models.CharField(default='/images/default.png', max_length=500)),
                ('gallery', models.JSONField(blank=True, default=list)),
                ('last_synced_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Товар',
                'verbose_name_plural': 'Товари',
                'ordering': ['model_ref', 'color'],
                'indexes': [
                    models.Index(fields=['model_ref'], name='idx_product_model_ref'),
                    models.Index(fields=['brand'], name='idx_product_brand'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('model_ref', 'color'), name='uniq_product_model_color'),
                ],
            },
        ),
    ]
