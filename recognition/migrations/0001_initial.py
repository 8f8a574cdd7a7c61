from django.db import migrations, models
import django.core.validators
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Nomination',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('nominee_name', models.CharField(help_text='Name of the colleague being recognized', max_length=200, validators=[django.core.validators.MaxLengthValidator(200)])),
                ('nominee_department', models.CharField(max_length=100)),
                ('nominee_location', models.CharField(max_length=100)),
                ('category_id', models.CharField(choices=[('c1', 'Customer Obsession'), ('c2', 'Innovation Champion'), ('c3', 'Quality First'), ('c4', 'Collaboration Hero'), ('c5', 'Inspiring Leadership')], help_text='Award category', max_length=20)),
                ('nominator_name', models.CharField(default='Associate', max_length=100)),
                ('reason', models.TextField(help_text='Recognition narrative', max_length=4000)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['-created_at'], name='nomination_created_idx'),
                    models.Index(fields=['category_id'], name='nomination_category_idx'),
                ],
            },
        ),
    ]
