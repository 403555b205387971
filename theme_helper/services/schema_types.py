from enum import Enum


class SchemaType(str, Enum):
    """Schema.org types understood by the structured data builders"""

    ORGANIZATION = 'Organization'
    LOCALBUSINESS = 'LocalBusiness'
    PERSON = 'Person'
    PRODUCT = 'Product'
    ARTICLE = 'Article'
    NEWSARTICLE = 'NewsArticle'
    BLOGPOSTING = 'BlogPosting'
    BREADCRUMB = 'BreadcrumbList'
    EVENT = 'Event'
    RECIPE = 'Recipe'
    VIDEOOBJECT = 'VideoObject'
    FAQPAGE = 'FAQPage'
    HOWTO = 'HowTo'
    WEBSITE = 'WebSite'
    WEBPAGE = 'WebPage'
    SOFTWAREAPPLICATION = 'SoftwareApplication'
    JOBPOSTING = 'JobPosting'
    COURSE = 'Course'
    REVIEW = 'Review'
    ITEMLIST = 'ItemList'
    IMAGEOBJECT = 'ImageObject'
    AUDIOOBJECT = 'AudioObject'
    BOOK = 'Book'
    DATASET = 'Dataset'
    SERVICE = 'Service'

    def __str__(self):
        return self.value

    @classmethod
    def resolve(cls, value):
        """Member for ``value`` or None when it is not a known type"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return None


ARTICLE_TYPES = (SchemaType.ARTICLE, SchemaType.NEWSARTICLE, SchemaType.BLOGPOSTING)

# Minimal properties expected by Google Rich Results for each type
REQUIRED_PROPERTIES = {
    SchemaType.PRODUCT: ('name', 'offers'),
    SchemaType.ARTICLE: ('headline',),
    SchemaType.NEWSARTICLE: ('headline',),
    SchemaType.BLOGPOSTING: ('headline',),
    SchemaType.BREADCRUMB: ('itemListElement',),
    SchemaType.EVENT: ('name', 'startDate', 'location'),
    SchemaType.FAQPAGE: ('mainEntity',),
    SchemaType.HOWTO: ('name', 'step'),
    SchemaType.LOCALBUSINESS: ('name', 'address'),
    SchemaType.VIDEOOBJECT: ('name', 'thumbnailUrl', 'uploadDate'),
    SchemaType.RECIPE: ('name', 'recipeIngredient', 'recipeInstructions'),
    SchemaType.SOFTWAREAPPLICATION: ('name', 'operatingSystem'),
    SchemaType.JOBPOSTING: ('title', 'hiringOrganization', 'jobLocation'),
    SchemaType.ITEMLIST: ('itemListElement',),
    SchemaType.IMAGEOBJECT: ('contentUrl',),
    SchemaType.WEBSITE: ('url', 'name'),
    SchemaType.WEBPAGE: ('url', 'name'),
    SchemaType.ORGANIZATION: ('name',),
}

URL_PROPERTIES = ('url', 'contentUrl', 'embedUrl', 'logo')

DATE_PROPERTIES = (
    'datePublished', 'dateModified', 'startDate', 'endDate', 'uploadDate', 'priceValidUntil',
)

OFFER_AVAILABILITY = frozenset(
    f'https://schema.org/{name}' for name in (
        'InStock', 'OutOfStock', 'PreOrder', 'PreSale', 'SoldOut',
        'LimitedAvailability', 'OnlineOnly', 'InStoreOnly', 'Discontinued',
    )
)

OFFER_ITEM_CONDITION = frozenset(
    f'https://schema.org/{name}' for name in (
        'NewCondition', 'UsedCondition', 'RefurbishedCondition', 'DamagedCondition',
    )
)
