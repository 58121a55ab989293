from datetime import date, datetime, time
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from bson import ObjectId
from loguru import logger
from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from crm import settings
from crm.common.domain import BaseDomain
from crm.network.database.connection import get_database
from crm.network.database.repository.exceptions import RepositoryIntegrityError, RepositoryObjectNotFound

ReadDomainType = TypeVar('ReadDomainType', bound=BaseDomain)
CreateDomainType = TypeVar('CreateDomainType', bound=BaseDomain)

Ordering = List[Tuple[str, int]]

_REPOSITORIES: List[Type['RepositoryMixin']] = []


def ensure_indexes(client: MongoClient) -> None:
    """
    Runs once when the connection is first established
    """
    database = client.get_default_database(default=settings.MONGODB_DB_NAME)
    for repository in _REPOSITORIES:
        collection = database[repository.__collection__]
        for index in repository.__indexes__:
            options = {key: value for key, value in index.items() if key != 'keys'}
            name = collection.create_index(index['keys'], **options)
            logger.debug(f'ensured index {repository.__collection__}.{name}')


def _encode_value(value: Any) -> Any:
    # BSON only knows datetimes
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    return value


class RepositoryMixin(Generic[ReadDomainType, CreateDomainType]):
    """
    Data access layer over a single collection. All interaction with the
    store should be routed through this layer. Public interfaces accept and
    return domains; documents never leave this class.
    """

    __collection__: str = NotImplemented
    __create_domain__: Type[CreateDomainType] = NotImplemented
    __read_domain__: Type[ReadDomainType] = NotImplemented
    # [{'keys': [('field', ASCENDING)], 'unique': True, 'name': '...'}]
    __indexes__: List[Dict[str, Any]] = []
    default_ordering: Ordering = [('_id', ASCENDING)]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__collection__ is not NotImplemented and cls not in _REPOSITORIES:
            _REPOSITORIES.append(cls)

    @classmethod
    def get_collection(cls) -> Collection:
        return get_database()[cls.__collection__]

    @classmethod
    def _object_id(cls, id: Any) -> ObjectId:
        if isinstance(id, ObjectId):
            return id
        if not ObjectId.is_valid(id):
            raise RepositoryObjectNotFound(f'{cls.__name__}: {id} not found!')
        return ObjectId(id)

    @classmethod
    def _document_key(cls, field_name: str) -> str:
        field = cls.__read_domain__.model_fields.get(field_name)
        if field is None:
            raise ValueError(f'{cls.__name__} has no field {field_name}')
        return field.alias or field_name

    @classmethod
    def _to_domain(cls, document: Dict[str, Any]) -> ReadDomainType:
        return cls.__read_domain__.model_validate(document)

    @classmethod
    def _to_document(cls, fields: Dict[str, Any]) -> Dict[str, Any]:
        return {cls._document_key(name): _encode_value(value) for name, value in fields.items()}

    @classmethod
    def get(cls, id: Any) -> ReadDomainType:
        document = cls.get_collection().find_one({'_id': cls._object_id(id)})
        if document is None:
            raise RepositoryObjectNotFound(f'{cls.__name__}: {id} not found!')
        return cls._to_domain(document)

    @classmethod
    def get_or_none(cls, id: Any) -> Optional[ReadDomainType]:
        try:
            return cls.get(id)
        except RepositoryObjectNotFound:
            return None

    @classmethod
    def list(
        cls,
        filter: Optional[Dict[str, Any]] = None,
        ordering: Optional[Ordering] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[ReadDomainType]:
        cursor = cls.get_collection().find(filter or {}).sort(ordering or cls.default_ordering)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return [cls._to_domain(document) for document in cursor]

    @classmethod
    def list_page(
        cls,
        page: int,
        page_size: int,
        filter: Optional[Dict[str, Any]] = None,
        ordering: Optional[Ordering] = None,
    ) -> List[ReadDomainType]:
        """
        Pages are 1 indexed
        """
        if page < 1 or page_size < 1:
            raise ValueError(f'Invalid page {page} / page size {page_size}')
        return cls.list(filter=filter, ordering=ordering, skip=(page - 1) * page_size, limit=page_size)

    @classmethod
    def count(cls, filter: Optional[Dict[str, Any]] = None) -> int:
        return int(cls.get_collection().count_documents(filter or {}))

    @classmethod
    def create(cls, domain_obj: CreateDomainType) -> ReadDomainType:
        document = {key: _encode_value(value) for key, value in domain_obj.to_document().items()}
        try:
            result = cls.get_collection().insert_one(document)
        except DuplicateKeyError as e:
            raise RepositoryIntegrityError(f'{cls.__name__}: duplicate key', context=e.details) from e
        document['_id'] = result.inserted_id
        return cls._to_domain(document)

    @classmethod
    def update(cls, id: Any, **fields: Any) -> ReadDomainType:
        object_id = cls._object_id(id)
        if not fields:
            return cls.get(object_id)
        try:
            document = cls.get_collection().find_one_and_update(
                {'_id': object_id},
                {'$set': cls._to_document(fields)},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise RepositoryIntegrityError(f'{cls.__name__}: duplicate key', context=e.details) from e
        if document is None:
            raise RepositoryObjectNotFound(f'{cls.__name__}: {id} not found!')
        return cls._to_domain(document)

    @classmethod
    def delete(cls, id: Any) -> ReadDomainType:
        document = cls.get_collection().find_one_and_delete({'_id': cls._object_id(id)})
        if document is None:
            raise RepositoryObjectNotFound(f'{cls.__name__}: {id} not found!')
        return cls._to_domain(document)

    @classmethod
    def delete_all(cls) -> int:
        return cls.get_collection().delete_many({}).deleted_count
