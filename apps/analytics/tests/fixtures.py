from datetime import date, time
from types import SimpleNamespace

from apps.authentication.models import User
from apps.campaigns.models import Campaign
from apps.events.models import Audience, Playback
from apps.markets.models import Device, Market
from apps.reports.models import Report


def create_dataset():
    """Two markets, three devices, campaigns A (June, client X) and B (July, client Y).

    Playbacks: A 30s on d1, A 45s on d3, B 60s on d1.
    """
    north = Market.objects.create(id='m1', name='Plaza Norte', city='Lima')
    south = Market.objects.create(id='m2', name='Mall Sur', city='Arequipa')

    d1 = Device.objects.create(id='d1', market=north, type=Device.TYPE_TV, name='Pantalla Norte 1')
    d2 = Device.objects.create(id='d2', market=north, type=Device.TYPE_CAMERA, name='Cámara Norte')
    d3 = Device.objects.create(id='d3', market=south, type=Device.TYPE_TV, name='Pantalla Sur 1')

    campaign_a = Campaign.objects.create(
        id='A', name='Campaña Invierno', client='X',
        start_date=date(2024, 6, 1), end_date=date(2024, 6, 30),
    )
    campaign_b = Campaign.objects.create(
        id='B', name='Campaña Fiestas', client='Y',
        start_date=date(2024, 7, 1), end_date=date(2024, 7, 31),
    )

    p1 = Playback.objects.create(id='p1', campaign=campaign_a, device=d1,
                                 date=date(2024, 6, 10), time=time(10, 0), duration=30)
    p2 = Playback.objects.create(id='p2', campaign=campaign_a, device=d3,
                                 date=date(2024, 6, 20), time=time(11, 30), duration=45)
    p3 = Playback.objects.create(id='p3', campaign=campaign_b, device=d1,
                                 date=date(2024, 7, 5), time=time(18, 15), duration=60)

    au1 = Audience.objects.create(id='au1', device=d2, date=date(2024, 6, 10), time=time(10, 0),
                                  visitors=120, impressions=300)
    au2 = Audience.objects.create(id='au2', device=d3, date=date(2024, 6, 20), time=time(11, 0),
                                  visitors=80, impressions=150)

    r1 = Report.objects.create(id='r1', campaign=campaign_a, summary_json={'playbacks': 2})
    r2 = Report.objects.create(id='r2', campaign=campaign_b, summary_json={'playbacks': 1})

    return SimpleNamespace(
        north=north, south=south, d1=d1, d2=d2, d3=d3,
        campaign_a=campaign_a, campaign_b=campaign_b,
        p1=p1, p2=p2, p3=p3, au1=au1, au2=au2, r1=r1, r2=r2,
    )


def create_role_users(market):
    password = 'testpass123'
    admin = User.objects.create_user(username='admin', email='admin@canal.test', password=password,
                                     role=User.ROLE_ADMIN)
    client = User.objects.create_user(username='cliente', email='cliente@canal.test', password=password,
                                      role=User.ROLE_CLIENT, client_id='X')
    market_user = User.objects.create_user(username='mercado', email='mercado@canal.test', password=password,
                                           role=User.ROLE_MARKET, market=market)
    return SimpleNamespace(admin=admin, client=client, market=market_user, password=password)
