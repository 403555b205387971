"""
Alternate JSON-LD node construction through pydantic schema-object models.

AlternateBuilder implements the narrow strategy interface used by the
structured data facade: ``build_node(schema_type, fields)`` returns a node
dict, or None for types it does not cover. Its output goes through the
regular builder's offer, rating, required and format checks. Any exception
raised here makes the facade fall back to the regular builder.
"""
from collections.abc import Mapping
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from theme_helper.services.schema import as_images, as_list, is_blank
from theme_helper.services.schema_types import ARTICLE_TYPES, SchemaType
from theme_helper.utils.helpers import site_name


class SchemaObject(BaseModel):
    """Base class for all schema.org objects"""

    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(default='Thing', alias='@type')

    def to_node(self) -> dict:
        """JSON-LD mapping without None values or empty lists"""
        data = {}
        for key, value in self.model_dump(exclude_none=True, by_alias=True).items():
            if is_blank(value):
                continue
            data[key] = value
        return data


class Brand(SchemaObject):
    type: str = Field(default='Brand', alias='@type')
    name: Optional[str] = None


class Person(SchemaObject):
    type: str = Field(default='Person', alias='@type')
    name: Optional[str] = None


class Organization(SchemaObject):
    type: str = Field(default='Organization', alias='@type')
    name: Optional[str] = None


class Offer(SchemaObject):
    type: str = Field(default='Offer', alias='@type')
    price: Union[str, int, float]
    priceCurrency: str
    availability: Optional[str] = None
    url: Optional[str] = None


class ListItem(SchemaObject):
    type: str = Field(default='ListItem', alias='@type')
    position: int
    name: Optional[str] = None
    item: Optional[str] = None


class Product(SchemaObject):
    type: str = Field(default='Product', alias='@type')
    name: Optional[str] = None
    image: List[Any] = Field(default_factory=list)
    description: Optional[str] = None
    sku: Optional[str] = None
    brand: Optional[Brand] = None
    offers: List[Offer] = Field(default_factory=list)


class Article(SchemaObject):
    type: str = Field(default='Article', alias='@type')
    headline: Optional[str] = None
    description: Optional[str] = None
    image: List[Any] = Field(default_factory=list)
    datePublished: Optional[str] = None
    dateModified: Optional[str] = None
    mainEntityOfPage: Optional[str] = None
    author: Optional[Person] = None
    publisher: Optional[Organization] = None


class NewsArticle(Article):
    type: str = Field(default='NewsArticle', alias='@type')


class BlogPosting(Article):
    type: str = Field(default='BlogPosting', alias='@type')


class BreadcrumbList(SchemaObject):
    type: str = Field(default='BreadcrumbList', alias='@type')
    itemListElement: List[ListItem] = Field(default_factory=list)


class LocalBusiness(SchemaObject):
    type: str = Field(default='LocalBusiness', alias='@type')
    name: Optional[str] = None
    image: List[Any] = Field(default_factory=list)
    url: Optional[str] = None
    telephone: Optional[str] = None
    address: Optional[Union[str, dict]] = None
    openingHours: Optional[Union[str, List[str]]] = None
    sameAs: List[str] = Field(default_factory=list)


class Event(SchemaObject):
    type: str = Field(default='Event', alias='@type')
    name: Optional[str] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    image: List[Any] = Field(default_factory=list)
    description: Optional[str] = None
    location: Optional[Union[str, dict]] = None
    offers: List[Offer] = Field(default_factory=list)


class VideoObject(SchemaObject):
    type: str = Field(default='VideoObject', alias='@type')
    name: Optional[str] = None
    description: Optional[str] = None
    thumbnailUrl: List[str] = Field(default_factory=list)
    uploadDate: Optional[str] = None
    duration: Optional[str] = None
    contentUrl: Optional[str] = None
    embedUrl: Optional[str] = None


class Recipe(SchemaObject):
    type: str = Field(default='Recipe', alias='@type')
    name: Optional[str] = None
    description: Optional[str] = None
    image: List[Any] = Field(default_factory=list)
    totalTime: Optional[str] = None
    recipeIngredient: List[Any] = Field(default_factory=list)
    recipeInstructions: List[Any] = Field(default_factory=list)


ARTICLE_MODELS = {
    SchemaType.ARTICLE: Article,
    SchemaType.NEWSARTICLE: NewsArticle,
    SchemaType.BLOGPOSTING: BlogPosting,
}


def _name_of(value):
    if isinstance(value, Mapping):
        return value.get('name')
    return value


def _offers(d):
    offers = d.get('offers')
    if isinstance(offers, Mapping):
        offers = [offers]
    return [
        Offer(
            price=o.get('price'),
            priceCurrency=o.get('priceCurrency') if o.get('priceCurrency') is not None else o.get('currency'),
            availability=o.get('availability'),
            url=o.get('url'),
        )
        for o in as_list(offers)
    ]


class AlternateBuilder:
    """Builds nodes for the supported subset of types with pydantic models"""

    SUPPORTED_TYPES = frozenset((
        SchemaType.PRODUCT, *ARTICLE_TYPES, SchemaType.BREADCRUMB, SchemaType.LOCALBUSINESS,
        SchemaType.EVENT, SchemaType.VIDEOOBJECT, SchemaType.RECIPE,
    ))

    def supports(self, schema_type) -> bool:
        return SchemaType.resolve(schema_type) in self.SUPPORTED_TYPES

    def build_node(self, schema_type, fields):
        variant = SchemaType.resolve(schema_type)
        if variant not in self.SUPPORTED_TYPES:
            return None
        d = fields or {}

        if variant is SchemaType.PRODUCT:
            model = Product(
                name=d.get('name') or site_name(),
                image=as_images(d.get('image')),
                description=d.get('description'),
                sku=d.get('sku'),
                brand=Brand(name=_name_of(d['brand'])) if not is_blank(d.get('brand')) else None,
                offers=_offers(d),
            )

        elif variant in ARTICLE_TYPES:
            model = ARTICLE_MODELS[variant](
                headline=d.get('headline') if d.get('headline') is not None else d.get('title'),
                description=d.get('description'),
                image=as_images(d.get('image')),
                datePublished=d.get('datePublished'),
                dateModified=d.get('dateModified'),
                mainEntityOfPage=d.get('url') if d.get('url') is not None else d.get('mainEntityOfPage'),
                author=Person(name=_name_of(d['author'])) if not is_blank(d.get('author')) else None,
                publisher=(Organization(name=_name_of(d['publisher']))
                           if not is_blank(d.get('publisher')) else None),
            )

        elif variant is SchemaType.BREADCRUMB:
            items = []
            for index, item in enumerate(as_list(d.get('items'))):
                items.append(ListItem(
                    position=index + 1 if item.get('position') is None else item['position'],
                    name=item.get('name'),
                    item=item.get('item') if item.get('item') is not None else item.get('url'),
                ))
            model = BreadcrumbList(itemListElement=items)

        elif variant is SchemaType.LOCALBUSINESS:
            model = LocalBusiness(
                name=d.get('name') or site_name(),
                image=as_images(d.get('image')),
                url=d.get('url'),
                telephone=d.get('telephone'),
                address=d.get('address') or None,
                openingHours=d.get('openingHours') or None,
                sameAs=as_list(d.get('sameAs')),
            )

        elif variant is SchemaType.EVENT:
            model = Event(
                name=d.get('name'),
                startDate=d.get('startDate'),
                endDate=d.get('endDate'),
                image=as_images(d.get('image')),
                description=d.get('description'),
                location=d.get('location') or None,
                offers=_offers(d),
            )

        elif variant is SchemaType.VIDEOOBJECT:
            model = VideoObject(
                name=d.get('name'),
                description=d.get('description'),
                thumbnailUrl=as_images(d.get('thumbnailUrl')),
                uploadDate=d.get('uploadDate'),
                duration=d.get('duration'),
                contentUrl=d.get('contentUrl'),
                embedUrl=d.get('embedUrl'),
            )

        else:
            model = Recipe(
                name=d.get('name'),
                description=d.get('description'),
                image=as_images(d.get('image')),
                totalTime=d.get('totalTime'),
                recipeIngredient=as_list(d.get('recipeIngredient')),
                recipeInstructions=as_list(d.get('recipeInstructions')),
            )

        return model.to_node()
