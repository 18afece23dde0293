"""Import every model so metadata knows all tables."""

from nongkrongr.models.cafe import Cafe, cafe_amenities, cafe_tags, cafe_vibes  # noqa: F401
from nongkrongr.models.factcheck import NewsItem, SiteSettings, Ticket  # noqa: F401
from nongkrongr.models.feedback import Feedback, Setting  # noqa: F401
from nongkrongr.models.notification import Notification, PushSubscription  # noqa: F401
from nongkrongr.models.profile import Favorite, Profile  # noqa: F401
from nongkrongr.models.review import Review  # noqa: F401
from nongkrongr.models.spot import Event, Spot  # noqa: F401
from nongkrongr.models.vocabulary import Amenity, Tag, Vibe  # noqa: F401
