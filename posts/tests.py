from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from messaging.models import PrivateMessage
from users.models import User
from .forms import PostAdminForm, CommentAdminForm
from .models import Post, Comment


class PostFormTestBase(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(email='ana@x.com', name='Ana', password='password123')
        self.post = Post.objects.create(
            user=self.user,
            title='Lost keys',
            description='Black keychain near the park',
            lat=Decimal('44.426800'),
            lng=Decimal('26.102500'),
            post_type=Post.PostType.REQUEST,
            reward=Decimal('50.00'),
            tags=['keys', 'park'],
        )

    def post_data(self, **overrides):
        data = {
            'title': 'Found wallet',
            'description': 'Brown leather wallet at the bus stop',
            'lat': '45.7489',
            'lng': '21.2087',
            'user': self.user.pk,
            'post_type': 'FOUND',
            'reward': '0',
            'tags': 'wallet bus, wallet',
        }
        data.update(overrides)
        return data


class PostAdminFormTest(PostFormTestBase):
    def test_valid_post(self):
        form = PostAdminForm(data=self.post_data())
        self.assertTrue(form.is_valid(), form.errors)
        post = form.save()
        self.assertEqual(post.user, self.user)
        self.assertEqual(post.tags, ['wallet', 'bus'])

    def test_tags_are_optional(self):
        form = PostAdminForm(data=self.post_data(tags=''))
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['tags'], [])

    def test_existing_tags_are_shown_as_text(self):
        form = PostAdminForm(instance=self.post)
        self.assertEqual(form['tags'].value(), 'keys park')

    def test_missing_user_fails_validation(self):
        form = PostAdminForm(data=self.post_data(user=999999))
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['user'], ['The selected record no longer exists.'])

    def test_hidden_user_fails_validation(self):
        self.user.deleted_at = timezone.now()
        self.user.save()
        form = PostAdminForm(data=self.post_data())
        self.assertFalse(form.is_valid())
        self.assertIn('user', form.errors)

    def test_title_length(self):
        form = PostAdminForm(data=self.post_data(title='ab'))
        self.assertFalse(form.is_valid())
        self.assertIn('title', form.errors)

    def test_unknown_type(self):
        form = PostAdminForm(data=self.post_data(post_type='LOST'))
        self.assertFalse(form.is_valid())
        self.assertIn('post_type', form.errors)

    def test_coordinates_must_be_numeric(self):
        form = PostAdminForm(data=self.post_data(lat='north'))
        self.assertFalse(form.is_valid())
        self.assertIn('lat', form.errors)


class CommentAdminFormTest(PostFormTestBase):
    def test_valid_comment(self):
        form = CommentAdminForm(data={'user': self.user.pk, 'post': self.post.pk, 'description': 'Still missing?'})
        self.assertTrue(form.is_valid(), form.errors)
        comment = form.save()
        self.assertEqual(comment.post, self.post)

    def test_hidden_post_fails_validation(self):
        self.post.deleted_at = timezone.now()
        self.post.save()
        form = CommentAdminForm(data={'user': self.user.pk, 'post': self.post.pk, 'description': 'Still missing?'})
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['post'], ['The selected record no longer exists.'])

    def test_description_length(self):
        form = CommentAdminForm(data={'user': self.user.pk, 'post': self.post.pk, 'description': 'ok'})
        self.assertFalse(form.is_valid())
        self.assertIn('description', form.errors)

    def test_reference_labels_use_picker_template(self):
        form = CommentAdminForm()
        self.assertEqual(form.fields['user'].label_from_instance(self.user), 'Ana - ana@x.com')
        self.assertEqual(form.fields['post'].label_from_instance(self.post), 'Lost keys - Ana')


class PostAdminTest(PostFormTestBase):
    def setUp(self):
        super().setUp()
        self.admin_user = User.objects.create_superuser(email='admin@x.com', name='Admin', password='password123')
        self.client.force_login(self.admin_user)
        self.comment = Comment.objects.create(user=self.user, post=self.post, description='Seen them yesterday')

    def test_post_changelist(self):
        response = self.client.get(reverse('admin:posts_post_changelist'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Lost keys (Black keychain n...)')
        self.assertContains(response, 'keys, park')

    def test_hidden_filter(self):
        self.post.deleted_at = timezone.now()
        self.post.save()
        url = reverse('admin:posts_post_changelist')
        self.assertNotContains(self.client.get(url, {'trashed': 'without'}), 'Lost keys')
        self.assertContains(self.client.get(url, {'trashed': 'only'}), 'Lost keys')

    def test_comment_change_page_shows_resolved_labels(self):
        response = self.client.get(reverse('admin:posts_comment_change', args=[self.comment.pk]))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Ana - ana@x.com')
        self.assertContains(response, 'Lost keys - Ana')
        self.assertContains(response, '/api/pickers/posts/')

    def test_add_comment_through_admin(self):
        response = self.client.post(reverse('admin:posts_comment_add'), {
            'user': self.user.pk,
            'post': self.post.pk,
            'description': 'Found them at the station',
            '_save': 'Save',
        })
        self.assertEqual(response.status_code, 302)
        self.assertTrue(Comment.objects.filter(description='Found them at the station').exists())


class AuditReferencesCommandTest(PostFormTestBase):
    def test_reports_references_to_hidden_records(self):
        other = User.objects.create_user(email='ann@x.com', name='Ann', password='password123')
        comment = Comment.objects.create(user=other, post=self.post, description='Is this yours?')
        PrivateMessage.objects.create(sender=self.user, receiver=other, description='Hi')
        other.deleted_at = timezone.now()
        other.save()

        out = StringIO()
        call_command('audit_references', stdout=out)
        output = out.getvalue()
        self.assertIn(f'Comment #{comment.pk}: user_id points at users #{other.pk}', output)
        self.assertIn('receiver_id points at users', output)
        self.assertIn('2 stale reference(s) found.', output)

    def test_clean_database(self):
        out = StringIO()
        call_command('audit_references', stdout=out)
        self.assertIn('No stale references found.', out.getvalue())


class SeedDataCommandTest(TestCase):
    def test_seed_data(self):
        call_command('seed_data', posts=1, seed=7, stdout=StringIO())
        self.assertEqual(User.objects.count(), 4)
        self.assertEqual(Post.objects.count(), 4)
        self.assertEqual(Comment.objects.count(), 8)
        self.assertEqual(PrivateMessage.objects.count(), 4)
        for message in PrivateMessage.objects.all():
            self.assertNotEqual(message.sender_id, message.receiver_id)
