import clinic.models
import django.contrib.auth.models
import django.contrib.auth.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.CreateModel(
            name='User',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(default=False, help_text='Designates that this user has all permissions without explicitly assigning them.', verbose_name='superuser status')),
                ('username', models.CharField(error_messages={'unique': 'A user with that username already exists.'}, help_text='Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.', max_length=150, unique=True, validators=[django.contrib.auth.validators.UnicodeUsernameValidator()], verbose_name='username')),
                ('first_name', models.CharField(blank=True, max_length=150, verbose_name='first name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='last name')),
                ('email', models.EmailField(blank=True, max_length=254, verbose_name='email address')),
                ('is_staff', models.BooleanField(default=False, help_text='Designates whether the user can log into this admin site.', verbose_name='staff status')),
                ('is_active', models.BooleanField(default=True, help_text='Designates whether this user should be treated as active. Unselect this instead of deleting accounts.', verbose_name='active')),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now, verbose_name='date joined')),
                ('role', models.CharField(choices=[('admin', 'Administrator'), ('staff', 'Clinic staff')], default='staff', max_length=10)),
                ('groups', models.ManyToManyField(blank=True, help_text='The groups this user belongs to. A user will get all permissions granted to each of their groups.', related_name='user_set', related_query_name='user', to='auth.group', verbose_name='groups')),
                ('user_permissions', models.ManyToManyField(blank=True, help_text='Specific permissions for this user.', related_name='user_set', related_query_name='user', to='auth.permission', verbose_name='user permissions')),
            ],
            options={
                'verbose_name': 'user',
                'verbose_name_plural': 'users',
                'abstract': False,
            },
            managers=[
                ('objects', django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name='Announcement',
            fields=[
                ('id', models.CharField(default=clinic.models.generate_document_id, editable=False, max_length=20, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(db_index=True, editable=False)),
                ('updated_at', models.DateTimeField()),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField()),
                ('image', models.FileField(blank=True, max_length=512, upload_to=clinic.models._announcement_upload)),
            ],
            options={
                'ordering': ['-created_at'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='InventoryItem',
            fields=[
                ('id', models.CharField(default=clinic.models.generate_document_id, editable=False, max_length=20, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(db_index=True, editable=False)),
                ('updated_at', models.DateTimeField()),
                ('name', models.CharField(max_length=255)),
                ('category', models.CharField(db_index=True, max_length=64)),
                ('quantity', models.PositiveIntegerField(default=0)),
                ('unit', models.CharField(default='pcs', max_length=32)),
                ('expiration_date', models.DateField()),
                ('delivery_date', models.DateField(blank=True, null=True)),
            ],
            options={
                'ordering': ['-created_at'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='MedicalRecord',
            fields=[
                ('id', models.CharField(default=clinic.models.generate_document_id, editable=False, max_length=20, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(db_index=True, editable=False)),
                ('updated_at', models.DateTimeField()),
                ('student_id', models.CharField(blank=True, db_index=True, max_length=64)),
                ('school_id_number', models.CharField(db_index=True, max_length=64)),
                ('fullname', models.CharField(max_length=255)),
                ('first_name', models.CharField(blank=True, max_length=100)),
                ('middle_name', models.CharField(blank=True, max_length=100)),
                ('last_name', models.CharField(blank=True, max_length=100)),
                ('department', models.CharField(blank=True, max_length=255)),
                ('year_section', models.CharField(blank=True, max_length=64)),
                ('visit_date', models.DateField()),
                ('visit_time', models.CharField(blank=True, max_length=16)),
                ('reason_for_visit', models.TextField()),
                ('visit_type', models.CharField(choices=[('Check-up', 'Check-up'), ('Emergency', 'Emergency'), ('Follow-up', 'Follow-up'), ('Medication request', 'Medication request')], max_length=32)),
                ('temperature', models.CharField(blank=True, max_length=32)),
                ('blood_pressure', models.CharField(blank=True, max_length=32)),
                ('heart_rate', models.CharField(blank=True, max_length=32)),
                ('respiratory_rate', models.CharField(blank=True, max_length=32)),
                ('weight', models.CharField(blank=True, max_length=32)),
                ('height', models.CharField(blank=True, max_length=32)),
                ('initial_assessment', models.TextField(blank=True)),
                ('diagnosis', models.TextField(blank=True)),
                ('symptoms_observed', models.TextField(blank=True)),
                ('allergies', models.TextField(blank=True)),
                ('existing_medical_conditions', models.TextField(blank=True)),
                ('medication_given', models.TextField(blank=True)),
                ('first_aid_provided', models.TextField(blank=True)),
                ('procedures_done', models.TextField(blank=True)),
                ('advice_given', models.TextField(blank=True)),
                ('sent_home', models.CharField(blank=True, max_length=16)),
                ('parent_notified', models.CharField(blank=True, max_length=16)),
                ('referred_to', models.CharField(blank=True, max_length=255)),
                ('referral_reason', models.TextField(blank=True)),
                ('referral_time', models.CharField(blank=True, max_length=16)),
                ('transport_assistance', models.CharField(blank=True, max_length=64)),
                ('attending_personnel_name', models.CharField(max_length=255)),
                ('attending_personnel_id', models.CharField(blank=True, max_length=64)),
                ('additional_remarks', models.TextField(blank=True)),
            ],
            options={
                'ordering': ['-created_at'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='Registration',
            fields=[
                ('id', models.CharField(default=clinic.models.generate_document_id, editable=False, max_length=20, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(db_index=True, editable=False)),
                ('updated_at', models.DateTimeField()),
                ('fullname', models.CharField(max_length=255)),
                ('student_id_lrn', models.CharField(blank=True, max_length=64)),
                ('school_id_number', models.CharField(db_index=True, max_length=64)),
                ('department_course', models.CharField(max_length=255)),
                ('year_section', models.CharField(max_length=64)),
                ('contact_number', models.CharField(blank=True, max_length=32)),
                ('form_to_request', models.CharField(blank=True, max_length=255)),
                ('purpose', models.TextField(blank=True)),
                ('health_history', models.JSONField(blank=True, default=dict)),
                ('status', models.CharField(choices=[('active', 'Active'), ('inactive', 'Inactive')], db_index=True, default='active', max_length=10)),
            ],
            options={
                'ordering': ['-created_at'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='RequestForm',
            fields=[
                ('id', models.CharField(default=clinic.models.generate_document_id, editable=False, max_length=20, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(db_index=True, editable=False)),
                ('updated_at', models.DateTimeField()),
                ('fullname', models.CharField(max_length=255)),
                ('year_section', models.CharField(max_length=64)),
                ('school_id_number', models.CharField(db_index=True, max_length=64)),
                ('department_course', models.CharField(max_length=255)),
                ('assessment', models.CharField(max_length=255)),
                ('referred_to', models.CharField(max_length=255)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('rejected', 'Rejected'), ('processing', 'Processing')], db_index=True, default='pending', max_length=20)),
            ],
            options={
                'verbose_name': 'request form',
                'ordering': ['-created_at'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='AuditEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(max_length=64)),
                ('object_type', models.CharField(blank=True, max_length=64, null=True)),
                ('object_id', models.CharField(blank=True, max_length=64, null=True)),
                ('detail', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'indexes': [
                    models.Index(fields=['action', 'created_at'], name='clinic_audit_action_idx'),
                    models.Index(fields=['object_type', 'object_id', 'created_at'], name='clinic_audit_object_idx'),
                ],
            },
        ),
    ]
