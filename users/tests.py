from datetime import date, timedelta

from django.core.exceptions import ValidationError
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from users.models import User
from users.validators import adult_cutoff, validate_adult_birth_date


class UserModelTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(email='Ana@X.com', name='Ana', password='password123')

    def test_create_user_normalizes_email(self):
        self.assertEqual(self.user.email, 'Ana@x.com')
        self.assertTrue(self.user.check_password('password123'))
        self.assertFalse(self.user.is_staff)

    def test_create_user_requires_email(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email='', name='Nobody', password='password123')

    def test_create_superuser(self):
        admin_user = User.objects.create_superuser(email='admin@x.com', name='Admin', password='password123')
        self.assertTrue(admin_user.is_staff)
        self.assertTrue(admin_user.is_superuser)
        self.assertEqual(admin_user.role_tags, ['admin', 'verified'])

    def test_role_tags(self):
        self.assertEqual(self.user.role_tags, ['user', 'not verified'])

    def test_alive_excludes_hidden_users(self):
        self.user.deleted_at = timezone.now()
        self.user.save()
        self.assertTrue(self.user.is_hidden)
        self.assertFalse(User.objects.alive().filter(pk=self.user.pk).exists())
        self.assertTrue(User.objects.hidden().filter(pk=self.user.pk).exists())


class UserValidationTest(TestCase):
    def build_user(self, **fields):
        user = User(email='val@x.com', name='Validated', password='unused')
        for key, value in fields.items():
            setattr(user, key, value)
        return user

    def assert_field_error(self, field, **fields):
        with self.assertRaises(ValidationError) as ctx:
            self.build_user(**fields).full_clean()
        self.assertIn(field, ctx.exception.message_dict)

    def test_valid_optional_details(self):
        self.build_user(
            address='Str. Lalelelor 12, Bl. A',
            phone_number='(0721) 123-456',
            date_of_birth=date(1990, 5, 17),
        ).full_clean()

    def test_address_rejects_symbols(self):
        self.assert_field_error('address', address='Main street 12 ; DROP')

    def test_address_too_short(self):
        self.assert_field_error('address', address='Str 1')

    def test_phone_number_format(self):
        self.assert_field_error('phone_number', phone_number='call me maybe')

    def test_under_aged_user_is_rejected(self):
        self.assert_field_error('date_of_birth', date_of_birth=timezone.localdate() - timedelta(days=365))

    def test_adult_cutoff_handles_leap_day(self):
        self.assertEqual(adult_cutoff(date(2024, 2, 29)), date(2006, 2, 28))

    def test_exactly_eighteen_is_allowed(self):
        validate_adult_birth_date(adult_cutoff())

    def test_under_age_message(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_adult_birth_date(timezone.localdate())
        self.assertEqual(ctx.exception.messages, ["Date of birth can't be for setting an under aged user"])


class UserAdminTest(TestCase):
    def setUp(self):
        self.admin_user = User.objects.create_superuser(email='admin@x.com', name='Admin', password='password123')
        self.client.force_login(self.admin_user)

    def test_changelist(self):
        User.objects.create_user(email='ana@x.com', name='Ana', password='password123', description='Looking for a lost cat')
        response = self.client.get(reverse('admin:users_user_changelist'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Ana (Looking for a lo...)')

    def test_add_user(self):
        response = self.client.post(reverse('admin:users_user_add'), {
            'email': 'new@x.com',
            'name': 'New User',
            'password1': 'Str0ng-Passw0rd!',
            'password2': 'Str0ng-Passw0rd!',
            '_save': 'Save',
        })
        self.assertEqual(response.status_code, 302)
        self.assertTrue(User.objects.filter(email='new@x.com', name='New User').exists())

    def test_change_page(self):
        response = self.client.get(reverse('admin:users_user_change', args=[self.admin_user.pk]))
        self.assertEqual(response.status_code, 200)
