from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from apps.markets.models import Market

User = get_user_model()


class Command(BaseCommand):
    help = 'Create a user with an admin, client or market role'

    def add_arguments(self, parser):
        parser.add_argument('--email', type=str, required=True)
        parser.add_argument('--password', type=str, required=True)
        parser.add_argument('--username', type=str, required=True)
        parser.add_argument('--role', type=str, default=User.ROLE_CLIENT,
                            choices=[choice for choice, _ in User.ROLE_CHOICES])
        parser.add_argument('--client_id', type=str, default=None)
        parser.add_argument('--market_id', type=str, default=None)

    def handle(self, *args, **options):
        email = options['email']
        role = options['role']
        client_id = options['client_id']
        market_id = options['market_id']

        if User.objects.filter(email=email).exists():
            self.stdout.write(
                self.style.ERROR(f'User with email {email} already exists')
            )
            return

        if role == User.ROLE_CLIENT and not client_id:
            raise CommandError('--client_id is required for client users')

        market = None
        if role == User.ROLE_MARKET:
            if not market_id:
                raise CommandError('--market_id is required for market users')
            try:
                market = Market.objects.get(pk=market_id)
            except Market.DoesNotExist:
                raise CommandError(f'Market {market_id} does not exist')

        User.objects.create_user(
            username=options['username'],
            email=email,
            password=options['password'],
            role=role,
            client_id=client_id if role == User.ROLE_CLIENT else None,
            market=market,
        )

        self.stdout.write(
            self.style.SUCCESS(f'Successfully created {role} user {email}')
        )
