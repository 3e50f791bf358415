# -*- coding: utf-8 -*-
from django.db import models, migrations


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='ChangeTracker',
            fields=[
                ('id', models.AutoField(verbose_name='ID',
                 serialize=False, auto_created=True, primary_key=True)),
                ('core', models.CharField(max_length=30)),
                ('record_id', models.CharField(max_length=120)),
                ('first_indexed', models.DateTimeField()),
                ('last_indexed', models.DateTimeField()),
                ('last_record_change', models.DateTimeField()),
                ('deleted', models.DateTimeField(null=True, blank=True)),
            ],
            options={
                'db_table': 'change_tracker',
                'unique_together': {('core', 'record_id')},
            },
            bases=(models.Model,),
        ),
    ]
