from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ImageIndexEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('model_ref', models.CharField(max_length=50)),
                ('color', models.CharField(help_text='Сегмент кольору з імені файлу (без нормалізації)', max_length=50)),
                ('filename', models.CharField(max_length=255, unique=True)),
                ('url', models.TextField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Зображення в індексі',
                'verbose_name_plural': 'Індекс зображень',
                'ordering': ['filename'],
                'indexes': [
                    models.Index(fields=['model_ref'], name='idx_image_index_model_ref'),
                    models.Index(fields=['model_ref', 'color'], name='idx_image_index_model_color'),
                ],
            },
        ),
    ]
