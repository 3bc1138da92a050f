from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from users.models import User
from .forms import PrivateMessageAdminForm
from .models import PrivateMessage


class PrivateMessageFormTest(TestCase):
    def setUp(self):
        self.ana = User.objects.create_user(email='ana@x.com', name='Ana', password='password123')
        self.ann = User.objects.create_user(email='ann@x.com', name='Ann', password='password123')

    def test_different_users(self):
        form = PrivateMessageAdminForm(data={
            'sender': self.ana.pk,
            'receiver': self.ann.pk,
            'description': 'Is the wallet still with you?',
        })
        self.assertTrue(form.is_valid(), form.errors)
        message = form.save()
        self.assertEqual(message.sender, self.ana)
        self.assertEqual(message.receiver, self.ann)
        self.assertFalse(message.seen)

    def test_sender_equals_receiver(self):
        form = PrivateMessageAdminForm(data={
            'sender': self.ana.pk,
            'receiver': self.ana.pk,
            'description': 'Note to self',
        })
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['receiver'], ['The receiver must be different from the sender.'])

    def test_sender_equals_receiver_reported_with_other_errors(self):
        form = PrivateMessageAdminForm(data={'sender': self.ana.pk, 'receiver': self.ana.pk})
        self.assertFalse(form.is_valid())
        self.assertIn('description', form.errors)
        self.assertIn('receiver', form.errors)

    def test_description_max_length(self):
        form = PrivateMessageAdminForm(data={
            'sender': self.ana.pk,
            'receiver': self.ann.pk,
            'description': 'x' * 513,
        })
        self.assertFalse(form.is_valid())
        self.assertIn('description', form.errors)

    def test_hidden_receiver(self):
        self.ann.deleted_at = timezone.now()
        self.ann.save()
        form = PrivateMessageAdminForm(data={
            'sender': self.ana.pk,
            'receiver': self.ann.pk,
            'description': 'Hello',
        })
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['receiver'], ['The selected record no longer exists.'])


class PrivateMessageAdminTest(TestCase):
    def setUp(self):
        self.admin_user = User.objects.create_superuser(email='admin@x.com', name='Admin', password='password123')
        self.ana = User.objects.create_user(email='ana@x.com', name='Ana', password='password123')
        self.client.force_login(self.admin_user)

    def test_add_page(self):
        response = self.client.get(reverse('admin:messaging_privatemessage_add'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, '/api/pickers/users/')

    def test_same_sender_and_receiver_is_not_saved(self):
        response = self.client.post(reverse('admin:messaging_privatemessage_add'), {
            'sender': self.ana.pk,
            'receiver': self.ana.pk,
            'description': 'Hello me',
            '_save': 'Save',
        })
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'The receiver must be different from the sender.')
        self.assertEqual(PrivateMessage.objects.count(), 0)

    def test_changelist(self):
        PrivateMessage.objects.create(sender=self.admin_user, receiver=self.ana, description='Welcome')
        response = self.client.get(reverse('admin:messaging_privatemessage_changelist'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Ana')
