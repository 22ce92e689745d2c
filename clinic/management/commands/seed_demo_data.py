"""
Management command to populate the database with demo clinic data.

Documents are back-dated over the last few months so the report screen
has something to chart.
"""
import random
from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from clinic.models import Announcement, InventoryItem, MedicalRecord, Registration, RequestForm

DEPARTMENTS = ['BSIT', 'BSCS', 'BSED', 'BSBA', 'BSN', 'BSCRIM']
SECTIONS = ['1-A', '1-B', '2-A', '2-B', '3-A', '4-A']
ASSESSMENTS = ['Paracetamol', 'Ibuprofen', 'Mefenamic Acid', 'Cetirizine', 'Medical Certificate', 'Loperamide']
REFERRALS = ['School Physician', 'Guidance Office', 'City Hospital', 'None']
FIRST_NAMES = ['Juan', 'Maria', 'Jose', 'Ana', 'Mark', 'Angela', 'Paolo', 'Bea', 'Carlo', 'Liza']
LAST_NAMES = ['Santos', 'Reyes', 'Cruz', 'Bautista', 'Garcia', 'Mendoza', 'Torres', 'Flores']


class Command(BaseCommand):
    help = 'Populate the database with demo clinic data'

    def add_arguments(self, parser):
        parser.add_argument('--students', type=int, default=30)
        parser.add_argument('--requests', type=int, default=80)
        parser.add_argument('--months', type=int, default=6, help='Spread documents over this many months')
        parser.add_argument('--seed', type=int, default=None)

    def handle(self, *args, **options):
        if options['seed'] is not None:
            random.seed(options['seed'])
        self.now = timezone.now()
        self.span_days = max(options['months'], 1) * 30

        students = self.create_registrations(options['students'])
        self.create_requests(students, options['requests'])
        self.create_medical_records(students)
        self.create_inventory()
        self.create_announcements()
        self.stdout.write(self.style.SUCCESS('Demo data created.'))

    def random_moment(self):
        return self.now - timedelta(days=random.randint(0, self.span_days), minutes=random.randint(0, 24 * 60))

    def stamped(self):
        at = self.random_moment()
        return {'created_at': at, 'updated_at': at}

    def create_registrations(self, count):
        students = []
        for i in range(count):
            first, last = random.choice(FIRST_NAMES), random.choice(LAST_NAMES)
            reg = Registration.objects.create(
                fullname=f'{first} {last}',
                student_id_lrn=f'1{random.randint(10**10, 10**11 - 1)}',
                school_id_number=f'{self.now.year - random.randint(0, 3)}-{i + 1:05d}',
                department_course=random.choice(DEPARTMENTS),
                year_section=random.choice(SECTIONS),
                contact_number=f'09{random.randint(10**8, 10**9 - 1)}',
                health_history={'asthma': random.random() < 0.1, 'allergies': random.choice(['', 'Penicillin', 'Seafood'])},
                status='active' if random.random() < 0.9 else 'inactive',
                **self.stamped(),
            )
            students.append(reg)
        self.stdout.write(f'Registrations: {len(students)}')
        return students

    def create_requests(self, students, count):
        for _ in range(count):
            # a few walk-ins who never registered
            if students and random.random() < 0.85:
                s = random.choice(students)
                fullname, school_id = s.fullname, s.school_id_number
                dept, section = s.department_course, s.year_section
            else:
                fullname = f'{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}'
                school_id = f'{self.now.year}-{random.randint(50000, 99999)}'
                dept, section = random.choice(DEPARTMENTS), random.choice(SECTIONS)
            RequestForm.objects.create(
                fullname=fullname,
                school_id_number=school_id,
                department_course=dept,
                year_section=section,
                assessment=random.choice(ASSESSMENTS),
                referred_to=random.choice(REFERRALS),
                status=random.choice(['pending', 'approved', 'approved', 'rejected', 'processing']),
                **self.stamped(),
            )
        self.stdout.write(f'Requests: {count}')

    def create_medical_records(self, students):
        visit_types = [value for value, _ in MedicalRecord.VISIT_TYPE_CHOICES]
        count = 0
        for s in random.sample(students, k=min(len(students), 15)):
            stamp = self.stamped()
            MedicalRecord.objects.create(
                school_id_number=s.school_id_number,
                fullname=s.fullname,
                department=s.department_course,
                year_section=s.year_section,
                visit_date=timezone.localtime(stamp['created_at']).date(),
                visit_time=timezone.localtime(stamp['created_at']).strftime('%H:%M'),
                reason_for_visit=random.choice(['Headache', 'Fever', 'Stomach ache', 'Minor cut', 'Dizziness']),
                visit_type=random.choice(visit_types),
                temperature=f'{random.uniform(36.2, 38.5):.1f}',
                blood_pressure=f'{random.randint(100, 130)}/{random.randint(60, 85)}',
                medication_given=random.choice(ASSESSMENTS[:4] + ['']),
                attending_personnel_name='Clinic Nurse',
                **stamp,
            )
            count += 1
        self.stdout.write(f'Medical records: {count}')

    def create_inventory(self):
        items = [
            ('Paracetamol 500mg', 'Medications', 'tabs'),
            ('Ibuprofen 200mg', 'Medications', 'tabs'),
            ('Mefenamic Acid 250mg', 'Medications', 'caps'),
            ('Cetirizine 10mg', 'Medications', 'tabs'),
            ('Gauze pads', 'Medical Supplies', 'pcs'),
            ('Adhesive bandage', 'First Aid', 'pcs'),
            ('Alcohol 70%', 'Consumables', 'bottles'),
            ('Digital thermometer', 'Equipment', 'pcs'),
        ]
        for name, category, unit in items:
            delivered = timezone.localdate() - timedelta(days=random.randint(5, 120))
            InventoryItem.objects.get_or_create(
                name=name,
                defaults={
                    'category': category,
                    'unit': unit,
                    'quantity': random.randint(10, 300),
                    'delivery_date': delivered,
                    'expiration_date': delivered + timedelta(days=random.randint(180, 900)),
                },
            )
        self.stdout.write(f'Inventory items: {len(items)}')

    def create_announcements(self):
        notices = [
            ('Annual physical examination', 'All freshmen must complete their physical examination before the end of the month.'),
            ('Dengue awareness week', 'Free consultation and fogging schedule posted at the clinic lobby.'),
        ]
        for title, description in notices:
            Announcement.objects.get_or_create(title=title, defaults={'description': description})
        self.stdout.write(f'Announcements: {len(notices)}')
