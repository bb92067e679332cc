# Generated initial migration for accounts app
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='UserRole',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('user_id', models.BigIntegerField(unique=True)),
                ('role', models.CharField(choices=[('admin', 'Administrator'), ('editor', 'Editor')], max_length=16)),
            ],
            options={
                'ordering': ['id'],
            },
        ),
    ]
