# telerelay/schemas/messaging.py
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ConfigDict, Field, PrivateAttr, model_validator
from pydantic.alias_generators import to_camel

from telerelay.schemas.common import CamelModel, PhoneNumber


class Person(CamelModel):
    """
    A recipient. Any extra keys in the payload are kept and can be used
    as template fields alongside the named ones.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: PhoneNumber

    # payload keys in the order they arrived
    _key_order: List[str] = PrivateAttr(default_factory=list)

    @model_validator(mode="wrap")
    @classmethod
    def _remember_key_order(cls, data: Any, handler):
        person = handler(data)
        if isinstance(data, dict):
            person._key_order = list(data)
        return person

    def _ordered_dump(self, exclude: Iterable[str] = ()) -> Dict[str, Any]:
        """model_dump by alias, keys in payload order, unset fields dropped."""
        dumped = self.model_dump(by_alias=True, exclude_none=True, exclude=set(exclude))
        fields = type(self).model_fields
        order = []
        for key in self._key_order:
            name = fields[key].alias if key in fields else key
            if name in dumped and name not in order:
                order.append(name)
        order.extend(name for name in dumped if name not in order)
        return {name: dumped[name] for name in order}

    def template_fields(self) -> Dict[str, str]:
        """
        Field name -> text, keyed by the JSON (camelCase) names, in the
        order the payload listed them. Unset fields are skipped.
        """
        return {name: str(value) for name, value in self._ordered_dump().items()}


class SendRequest(Person):
    message: str = Field(min_length=1)

    def recipient(self) -> Person:
        return Person.model_validate(self._ordered_dump(exclude={"message"}))


class BroadcastRequest(CamelModel):
    people: List[Person]
    message: str = Field(min_length=1)


class MessageReceipt(CamelModel):
    sid: str
    status: Optional[str] = None
    to: Optional[str] = None
    from_number: Optional[str] = None
    body: Optional[str] = None


class CallReceipt(CamelModel):
    sid: str
    status: Optional[str] = None
    to: Optional[str] = None
    from_number: Optional[str] = None
