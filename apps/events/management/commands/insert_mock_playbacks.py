from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from tasks.ingestion import SAMPLE_PLAYBACKS, generate_random_playbacks, submit_playbacks

PLACEHOLDER_KEYS = ('', 'YOUR_SERVICE_ROLE_KEY', 'YOUR_SUPABASE_ANON_KEY')


class Command(BaseCommand):
    help = 'Submit test playbacks to the insert-playback endpoint'

    def add_arguments(self, parser):
        parser.add_argument('--random', type=int, nargs='?', const=10, default=None, metavar='COUNT',
                            help='Submit COUNT random playbacks for June 2024 instead of the fixed sample set')
        parser.add_argument('--endpoint', type=str, default=None)
        parser.add_argument('--pacing', type=float, default=None,
                            help='Seconds to wait between submissions')

    def handle(self, *args, **options):
        if settings.INGESTION_SERVICE_KEY in PLACEHOLDER_KEYS:
            raise CommandError('INGESTION_SERVICE_KEY is not configured')

        if options['random'] is not None:
            if options['random'] < 1:
                raise CommandError('--random expects a positive count')
            playbacks = generate_random_playbacks(options['random'])
            pacing = 0.5
            self.stdout.write(f"Generating {len(playbacks)} random playbacks...")
        else:
            playbacks = SAMPLE_PLAYBACKS
            pacing = 1.0
            self.stdout.write('Inserting sample playbacks...')

        if options['pacing'] is not None:
            pacing = options['pacing']

        inserted, failed = submit_playbacks(playbacks, endpoint_url=options['endpoint'], pacing=pacing)

        style = self.style.SUCCESS if not failed else self.style.WARNING
        self.stdout.write(style(f'Insertion finished: {inserted} inserted, {failed} failed'))
