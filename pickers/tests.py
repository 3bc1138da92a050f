from decimal import Decimal
from unittest.mock import patch

from django.contrib import admin
from django.db import OperationalError
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from pickers.core import (
    MAX_RESULTS,
    NotFound,
    StoreUnavailable,
    UnknownEntityType,
    get_picker,
    registered_entity_types,
    resolve_label,
    search,
)
from pickers.widgets import PickerSelect
from posts.models import Post, Comment
from users.models import User

FETCH_ALL = 'django.db.models.query.QuerySet._fetch_all'


def make_user(name, email, **extra_fields):
    return User.objects.create_user(email=email, name=name, password='password123', **extra_fields)


def make_post(user, title='Lost keys', description='Black keychain near the park'):
    return Post.objects.create(
        user=user,
        title=title,
        description=description,
        lat=Decimal('44.426800'),
        lng=Decimal('26.102500'),
        post_type=Post.PostType.REQUEST,
        reward=Decimal('50.00'),
    )


class UserPickerSearchTest(TestCase):
    def setUp(self):
        self.ana = make_user('Ana', 'ana@x.com')
        self.ann = make_user('Ann', 'ann@x.com')

    def test_search_returns_matches_in_storage_order(self):
        options = search('an', 'users')
        self.assertEqual(options, {
            self.ana.pk: 'Ana - ana@x.com',
            self.ann.pk: 'Ann - ann@x.com',
        })
        self.assertEqual(list(options), [self.ana.pk, self.ann.pk])

    def test_search_is_case_insensitive(self):
        self.assertEqual(list(search('ANN', 'users')), [self.ann.pk])

    def test_search_matches_email(self):
        self.assertEqual(list(search('ana@', 'users')), [self.ana.pk])

    def test_search_matches_key_as_text(self):
        term = str(self.ann.pk)
        options = search(term, 'users')
        self.assertIn(self.ann.pk, options)
        for key in options:
            self.assertIn(term, str(key))

    def test_no_match_is_an_empty_option_set(self):
        self.assertEqual(search('zzz', 'users'), {})

    def test_empty_query_returns_everything(self):
        self.assertEqual(list(search('', 'users')), [self.ana.pk, self.ann.pk])
        self.assertEqual(search(None, 'users'), search('', 'users'))

    def test_hidden_users_are_not_offered(self):
        self.ann.deleted_at = timezone.now()
        self.ann.save()
        self.assertEqual(list(search('an', 'users')), [self.ana.pk])

    def test_wildcard_characters_match_literally(self):
        percent = make_user('100% Real', 'real@x.com')
        underscore = make_user('snake_case', 'snake@x.com')
        self.assertEqual(list(search('%', 'users')), [percent.pk])
        self.assertEqual(list(search('_', 'users')), [underscore.pk])

    def test_every_option_contains_the_query(self):
        make_user('Bogdan', 'bogdan@y.org')
        make_user('Ioana', 'ioana@z.ro')
        for key in search('AN', 'users'):
            user = User.objects.get(pk=key)
            haystacks = (user.name.lower(), user.email.lower(), str(user.pk))
            self.assertTrue(any('an' in text for text in haystacks))


class SearchLimitTest(TestCase):
    def setUp(self):
        User.objects.bulk_create([
            User(email=f'bulk{i}@example.com', name=f'Bulk User {i}')
            for i in range(MAX_RESULTS + 10)
        ])

    def test_empty_query_is_truncated(self):
        options = search('', 'users')
        self.assertEqual(len(options), MAX_RESULTS)
        self.assertEqual(list(options), sorted(options))

    def test_matching_query_is_truncated(self):
        self.assertEqual(len(search('bulk', 'users')), MAX_RESULTS)


class ResolveLabelTest(TestCase):
    def setUp(self):
        self.ana = make_user('Ana', 'ana@x.com')
        self.post = make_post(self.ana)

    def test_label_matches_search_label(self):
        for entity_type, query in (('users', 'ana'), ('posts', 'keys')):
            options = search(query, entity_type)
            self.assertTrue(options)
            for key, label in options.items():
                self.assertEqual(resolve_label(entity_type, key), label)

    def test_label_for_string_key(self):
        self.assertEqual(resolve_label('users', str(self.ana.pk)), 'Ana - ana@x.com')

    def test_missing_key_raises_not_found(self):
        with self.assertRaises(NotFound) as ctx:
            resolve_label('users', 999999)
        self.assertEqual(ctx.exception.key, 999999)
        self.assertEqual(ctx.exception.entity_type, 'users')

    def test_non_numeric_key_raises_not_found(self):
        with self.assertRaises(NotFound):
            resolve_label('users', 'abc')

    def test_hidden_row_raises_not_found(self):
        self.post.deleted_at = timezone.now()
        self.post.save()
        with self.assertRaises(NotFound):
            resolve_label('posts', self.post.pk)


class PostPickerTest(TestCase):
    def setUp(self):
        self.owner = make_user('Mihai', 'mihai@x.com')
        self.keys = make_post(self.owner, title='Lost keys', description='Black keychain near the park')
        self.dog = make_post(self.owner, title='Found dog', description='Brown terrier, very friendly')

    def test_label_includes_owner_name(self):
        self.assertEqual(search('keys', 'posts'), {self.keys.pk: 'Lost keys - Mihai'})

    def test_search_matches_description(self):
        self.assertEqual(list(search('terrier', 'posts')), [self.dog.pk])

    def test_owner_is_fetched_with_the_posts(self):
        with self.assertNumQueries(1):
            search('', 'posts')


class StoreUnavailableTest(TestCase):
    def setUp(self):
        self.ana = make_user('Ana', 'ana@x.com')

    def test_search_failure_is_propagated(self):
        with patch(FETCH_ALL, side_effect=OperationalError('database is down')):
            with self.assertLogs('pickers.core', level='ERROR'):
                with self.assertRaises(StoreUnavailable) as ctx:
                    search('an', 'users')
        self.assertIsInstance(ctx.exception.__cause__, OperationalError)

    def test_resolve_failure_is_propagated(self):
        with patch(FETCH_ALL, side_effect=OperationalError('database is down')):
            with self.assertLogs('pickers.core', level='ERROR'):
                with self.assertRaises(StoreUnavailable):
                    resolve_label('users', self.ana.pk)


class RegistryTest(TestCase):
    def test_pickers_are_registered_at_startup(self):
        self.assertIn('users', registered_entity_types())
        self.assertIn('posts', registered_entity_types())

    def test_unknown_entity_type(self):
        with self.assertRaises(UnknownEntityType):
            get_picker('widgets')
        with self.assertRaises(KeyError):
            search('x', 'widgets')


class PickerSelectWidgetTest(TestCase):
    def setUp(self):
        self.ana = make_user('Ana', 'ana@x.com')
        self.widget = PickerSelect(get_picker('users'), Comment._meta.get_field('user'), admin.site)
        self.widget.is_required = True

    def test_renders_selected_label_and_search_url(self):
        html = self.widget.render('user', self.ana.pk)
        self.assertIn('Ana - ana@x.com', html)
        self.assertIn('selected', html)
        self.assertIn('data-ajax--url="/api/pickers/users/"', html)

    def test_renders_placeholder_for_stale_reference(self):
        html = self.widget.render('user', 999999)
        self.assertIn('(no longer available: #999999)', html)

    def test_renders_no_option_without_value(self):
        html = self.widget.render('user', None)
        self.assertNotIn('<option', html)


class PickerAPITestCase(APITestCase):
    def setUp(self):
        self.staff = User.objects.create_superuser(email='staff@example.com', name='Staff', password='password123')
        self.ana = make_user('Ana', 'ana@x.com')
        self.ann = make_user('Ann', 'ann@x.com')
        self.client.force_authenticate(user=self.staff)
        self.search_url = reverse('picker-search', kwargs={'entity_type': 'users'})

    def test_search_returns_select2_payload(self):
        response = self.client.get(self.search_url, {'term': 'an'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['results'], [
            {'id': self.ana.pk, 'text': 'Ana - ana@x.com'},
            {'id': self.ann.pk, 'text': 'Ann - ann@x.com'},
        ])
        self.assertFalse(response.data['pagination']['more'])

    def test_search_accepts_q_alias(self):
        response = self.client.get(self.search_url, {'q': 'ann@'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([option['id'] for option in response.data['results']], [self.ann.pk])

    def test_search_requires_staff(self):
        self.client.force_authenticate(user=self.ana)
        response = self.client.get(self.search_url, {'term': 'an'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_unknown_entity_type_is_404(self):
        url = reverse('picker-search', kwargs={'entity_type': 'widgets'})
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_label_endpoint(self):
        url = reverse('picker-label', kwargs={'entity_type': 'users', 'key': self.ann.pk})
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'id': str(self.ann.pk), 'text': 'Ann - ann@x.com'})

    def test_label_endpoint_for_missing_key(self):
        url = reverse('picker-label', kwargs={'entity_type': 'users', 'key': 999999})
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['detail'], 'Reference no longer valid.')

    def test_store_failure_is_503(self):
        with patch(FETCH_ALL, side_effect=OperationalError('database is down')):
            with self.assertLogs('pickers.core', level='ERROR'):
                response = self.client.get(self.search_url, {'term': 'an'})
        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
