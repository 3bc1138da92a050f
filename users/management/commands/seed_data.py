import random
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from messaging.models import PrivateMessage
from posts.models import Post, Comment
from users.models import User


class Command(BaseCommand):
    help = 'Wipes the database and creates demo data (Users, Posts, Comments, Private messages).'

    def add_arguments(self, parser):
        parser.add_argument('--posts', type=int, default=5, help='Posts to create per user')
        parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible data')

    @transaction.atomic
    def handle(self, *args, **options):
        rng = random.Random(options['seed'])

        self.stdout.write('Deleting existing data...')
        PrivateMessage.objects.all().delete()
        Comment.objects.all().delete()
        Post.objects.all().delete()
        User.objects.all().delete()

        self.stdout.write('Creating new data...')

        # 1. Users
        users = [
            User.objects.create_user(email='ana@example.com', name='Ana Popescu', password='password123', is_verified=True),
            User.objects.create_user(email='ann@example.com', name='Ann Ionescu', password='password123'),
            User.objects.create_user(email='mihai@example.com', name='Mihai Stan', password='password123', is_verified=True),
            User.objects.create_superuser(email='admin@example.com', name='Administrator', password='password123'),
        ]
        self.stdout.write(self.style.SUCCESS(f'-> {len(users)} users created'))

        # 2. Posts and comments
        for author in users:
            for i in range(options['posts']):
                post_type = rng.choice(Post.PostType.values)
                post = Post.objects.create(
                    user=author,
                    title=f'{Post.PostType(post_type).label} #{i + 1} by {author.name}',
                    description=f'Demo {post_type.lower()} post created for {author.email}.',
                    lat=Decimal(f'{rng.uniform(43.6, 48.2):.6f}'),
                    lng=Decimal(f'{rng.uniform(20.2, 29.7):.6f}'),
                    post_type=post_type,
                    reward=Decimal(rng.randrange(0, 500, 10)),
                    tags=rng.sample(['keys', 'wallet', 'phone', 'pet', 'bike', 'documents'], k=2),
                )
                for j in range(2):
                    Comment.objects.create(
                        post=post,
                        user=rng.choice(users),
                        description=f'Comment {j + 1} on "{post.title}"',
                    )
        self.stdout.write(self.style.SUCCESS('-> posts and comments created'))

        # 3. Private messages between distinct users
        for sender in users:
            receiver = rng.choice([user for user in users if user.pk != sender.pk])
            PrivateMessage.objects.create(
                sender=sender,
                receiver=receiver,
                description=f'Hello {receiver.name}, this is {sender.name}.',
                seen=rng.random() < 0.5,
            )
        self.stdout.write(self.style.SUCCESS('-> private messages created'))

        self.stdout.write(self.style.SUCCESS('===================================='))
        self.stdout.write(self.style.SUCCESS('Demo data created successfully.'))
        self.stdout.write(self.style.SUCCESS('===================================='))
