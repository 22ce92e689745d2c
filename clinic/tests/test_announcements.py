import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse

from clinic.models import Announcement

pytestmark = pytest.mark.django_db

PNG_BYTES = (
    b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00\x1f\x15\xc4\x89'
    b'\x00\x00\x00\rIDATx\x9cc\xf8\x0f\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82'
)


def png(name='notice.png'):
    return SimpleUploadedFile(name, PNG_BYTES, content_type='image/png')


def test_anyone_can_read_announcements(api_client):
    Announcement.objects.create(title='Clinic hours', description='Open 8-5 on weekdays.')
    r = api_client.get(reverse('announcements'))
    assert r.status_code == 200
    assert [a['title'] for a in r.data['data']] == ['Clinic hours']
    assert r.data['data'][0]['image'] is None


def test_anonymous_cannot_post(api_client):
    r = api_client.post(reverse('announcements'), {'title': 'x', 'description': 'y'}, format='json')
    assert r.status_code == 401
    assert Announcement.objects.count() == 0


def test_post_with_image(staff_client, media_root):
    r = staff_client.post(
        reverse('announcements'),
        {'title': 'Dengue week', 'description': 'Free consultation.', 'image': png()},
        format='multipart',
    )
    assert r.status_code == 201
    data = r.data['data']
    assert data['title'] == 'Dengue week'
    assert data['image'].startswith('http://testserver/media/announcements/')
    assert data['image'].endswith('.png')

    stored = Announcement.objects.get(pk=data['id'])
    assert (media_root / stored.image.name).exists()


def test_post_without_image(staff_client):
    r = staff_client.post(reverse('announcements'), {'title': 'Reminder', 'description': 'Bring your ID.'}, format='json')
    assert r.status_code == 201
    assert r.data['data']['image'] is None


def test_post_missing_fields(staff_client):
    r = staff_client.post(reverse('announcements'), {'title': '  '}, format='json')
    assert r.status_code == 400
    assert sorted(r.data['fields']) == ['description', 'title']


def test_rejects_non_image_upload(staff_client, media_root):
    doc = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')
    r = staff_client.post(
        reverse('announcements'),
        {'title': 'Bad', 'description': 'Not an image', 'image': doc},
        format='multipart',
    )
    assert r.status_code == 400
    assert r.data['code'] == 'invalid_value'
    assert Announcement.objects.count() == 0


def test_rejects_oversized_upload(staff_client, media_root, settings):
    settings.UPLOAD_MAX_MB = 0
    r = staff_client.post(
        reverse('announcements'),
        {'title': 'Big', 'description': 'Too large', 'image': png()},
        format='multipart',
    )
    assert r.status_code == 400
    assert 'too large' in r.data['message']


def test_update_announcement(staff_client):
    a = Announcement.objects.create(title='Old', description='Old text')
    r = staff_client.put(reverse('announcement-detail', args=[a.pk]), {'title': 'New <i>title</i>'}, format='json')
    assert r.status_code == 200
    a.refresh_from_db()
    assert a.title == 'New title'
    assert a.description == 'Old text'
    assert a.updated_at >= a.created_at


def test_replacing_image_removes_old_file(staff_client, media_root):
    created = staff_client.post(
        reverse('announcements'),
        {'title': 'Poster', 'description': 'v1', 'image': png('v1.png')},
        format='multipart',
    ).data['data']
    old_name = Announcement.objects.get(pk=created['id']).image.name

    r = staff_client.put(
        reverse('announcement-detail', args=[created['id']]),
        {'image': png('v2.png')},
        format='multipart',
    )
    assert r.status_code == 200
    new_name = Announcement.objects.get(pk=created['id']).image.name
    assert new_name != old_name
    assert (media_root / new_name).exists()
    assert not (media_root / old_name).exists()


def test_delete_announcement(staff_client, media_root):
    created = staff_client.post(
        reverse('announcements'),
        {'title': 'Poster', 'description': 'bye', 'image': png()},
        format='multipart',
    ).data['data']
    name = Announcement.objects.get(pk=created['id']).image.name

    r = staff_client.delete(reverse('announcement-detail', args=[created['id']]))
    assert r.status_code == 200
    assert not Announcement.objects.filter(pk=created['id']).exists()
    assert not (media_root / name).exists()


def test_delete_unknown_announcement(staff_client):
    Announcement.objects.create(title='Keep', description='me')
    r = staff_client.delete(reverse('announcement-detail', args=['missing']))
    assert r.status_code == 404
    assert Announcement.objects.count() == 1


def test_text_with_ampersand_and_less_than_is_stored_as_typed(staff_client):
    r = staff_client.post(
        reverse('announcements'),
        {'title': 'Q&A day', 'description': 'BP < 120 is fine'},
        format='json',
    )
    assert r.status_code == 201
    assert r.data['data']['title'] == 'Q&A day'
    assert r.data['data']['description'] == 'BP < 120 is fine'
    stored = Announcement.objects.get(pk=r.data['data']['id'])
    assert stored.title == 'Q&A day'


def test_markup_only_title_is_missing(staff_client):
    a = Announcement.objects.create(title='Keep', description='me')
    r = staff_client.put(reverse('announcement-detail', args=[a.pk]), {'title': '<i> </i>'}, format='json')
    assert r.status_code == 400
    assert r.data['code'] == 'missing_field'
    a.refresh_from_db()
    assert a.title == 'Keep'
