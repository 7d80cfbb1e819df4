"""Session-backed one-time flash messages."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping, MutableMapping
from typing import Any, TypedDict

from fastapi import Request, Response
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sessionflash.config import Settings, get_settings
from sessionflash.exceptions import MalformedFlashSessionError, MissingFlashMessageError
from sessionflash.utils.htmx import is_ajax, wants_flash_header
from sessionflash.utils.session import SessionStore

logger = logging.getLogger(__name__)

SESSION_BRANCH = "Flash"
FLASH_HEADER = "X-Flash"

_UPPER_AFTER_WORD = re.compile(r"(?<=\w)([A-Z])")


class FlashMessage(TypedDict):
    message: Any
    key: str
    type: str  # default|success|error|...
    element: str  # template id, e.g. "flash/success" or "Blog.flash/notice"
    params: dict[str, Any]


class FlashOptions(BaseModel):
    """Options for one flash write, layered over the configured defaults."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    key: str = "flash"
    element: str = "default"
    type: str = "default"
    params: dict[str, Any] = Field(default_factory=dict)
    clear: bool = False
    duplicate: bool = True
    escape: bool | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> FlashOptions:
        return cls(
            key=settings.flash_key,
            element=settings.flash_element,
            type=settings.flash_type,
            clear=settings.flash_clear,
            duplicate=settings.flash_duplicate,
            params=dict(settings.flash_params),
        )

    def merged(self, overrides: Mapping[str, Any]) -> FlashOptions:
        """
        Return a copy with ``overrides`` applied.

        None values, unknown names and values of the wrong shape keep the
        default instead of failing the write.
        """
        model = type(self)
        data = self.model_dump()
        for name, value in overrides.items():
            if value is None or name not in model.model_fields:
                continue
            try:
                model.model_validate({**data, name: value})
            except ValidationError:
                logger.debug("Ignoring invalid flash option %s=%r", name, value)
                continue
            data[name] = value
        return model.model_validate(data)


def underscore(name: str) -> str:
    """``notFound`` -> ``not_found``, ``Success`` -> ``success``."""
    return _UPPER_AFTER_WORD.sub(r"_\1", name.replace("-", "_")).lower()


def element_path(element: str) -> str:
    """Map an element name to its flash template id (``Plugin.name`` aware)."""
    plugin, _, name = element.partition(".")
    if not name:
        plugin, name = "", element
    if plugin:
        return f"{plugin}.flash/{name}"
    return f"flash/{name}"


def _exception_parts(exc: BaseException) -> tuple[str, Any]:
    """Return (text, code) for an exception; code is None when it has none."""
    detail = getattr(exc, "detail", None)
    text = detail if isinstance(detail, str) else str(exc)
    code = getattr(exc, "code", None)
    if code is None:
        code = getattr(exc, "status_code", None)
    return text, code


class Flash:
    """
    Queue flash messages in the session for the next response.

    Messages live under ``Flash.<key>`` in the session and stack in the
    order they were set. A queue is removed by whoever delivers it: the
    page renderer (``consume``) or the AJAX header hook (``before_render``).
    """

    def __init__(self, session: SessionStore, defaults: FlashOptions | None = None) -> None:
        self.session = session
        self.defaults = defaults or FlashOptions()

    @classmethod
    def for_request(cls, request: Request, settings: Settings | None = None) -> Flash:
        """Bind to the session of ``request`` using settings-derived defaults."""
        settings = settings or get_settings()
        return cls(SessionStore(request.session), FlashOptions.from_settings(settings))

    def set(
        self,
        message: Any,
        options: Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> None:
        """
        Append ``message`` to the queue named by ``options["key"]``.

        ``message`` may be an exception: its text is used and its code is put
        into ``params["code"]`` unless already given.

        Options: ``key``, ``element``, ``type``, ``params``, ``clear`` (start a
        new queue), ``duplicate`` (False skips a message whose text is already
        queued) and ``escape`` (copied to ``params["escape"]``).
        """
        opts = self.defaults.merged({**(options or {}), **overrides})
        params = dict(opts.params)

        if isinstance(message, BaseException):
            message, code = _exception_parts(message)
            if code is not None and params.get("code") is None:
                params["code"] = code

        if opts.escape is not None and params.get("escape") is None:
            params["escape"] = opts.escape

        element = element_path(opts.element)
        path = f"{SESSION_BRANCH}.{opts.key}"

        messages: list[FlashMessage] = []
        if not opts.clear:
            existing = self.session.read(path)
            if isinstance(existing, list):
                messages = list(existing)
            elif existing is not None:
                messages = [existing]

        if not opts.duplicate and any(m.get("message") == message for m in messages):
            logger.debug("Skipping duplicate flash message for key %r", opts.key)
            return

        messages.append(
            {
                "message": message,
                "key": opts.key,
                "type": opts.type,
                "element": element,
                "params": params,
            }
        )
        self.session.write(path, messages)
        logger.debug("Queued %s flash message under %r (%d total)", opts.type, path, len(messages))

    def set_with_severity(self, severity: str, *args: Any) -> None:
        """
        Shorthand for ``set`` using ``severity`` as type and element.

        ``set_with_severity("notFound", "Gone")`` renders ``flash/not_found``.
        A ``plugin`` option selects the element from that plugin; ``element``
        itself cannot be overridden here.
        """
        element = underscore(severity)
        if not args:
            raise MissingFlashMessageError()

        options: dict[str, Any] = {"element": element, "type": severity}
        supplied = dict(args[1]) if len(args) > 1 and args[1] else {}
        if supplied:
            plugin = supplied.pop("plugin", None)
            if plugin:
                options["element"] = f"{plugin}.{element}"
            supplied.pop("element", None)
            options.update(supplied)

        self.set(args[0], options)

    def success(self, message: Any, options: Mapping[str, Any] | None = None) -> None:
        self.set_with_severity("success", message, options)

    def error(self, message: Any, options: Mapping[str, Any] | None = None) -> None:
        self.set_with_severity("error", message, options)

    def warning(self, message: Any, options: Mapping[str, Any] | None = None) -> None:
        self.set_with_severity("warning", message, options)

    def info(self, message: Any, options: Mapping[str, Any] | None = None) -> None:
        self.set_with_severity("info", message, options)

    def messages(self, key: str | None = None) -> list[FlashMessage]:
        """Return the queue for ``key`` without removing it."""
        stack = self.session.read(f"{SESSION_BRANCH}.{key or self.defaults.key}")
        return list(stack) if isinstance(stack, list) else []

    def consume(self, key: str | None = None) -> list[FlashMessage]:
        """Return and clear the queue for ``key`` (used when rendering a page)."""
        path = f"{SESSION_BRANCH}.{key or self.defaults.key}"
        stack = self.messages(key)
        self.session.delete(path)
        branch = self.session.read(SESSION_BRANCH)
        if isinstance(branch, MutableMapping) and not branch:
            self.session.delete(SESSION_BRANCH)
        return stack

    def before_render(self, request: Request, response: Response) -> Response:
        """
        Deliver all queued messages in the ``X-Flash`` header.

        Only for AJAX requests asking for it with ``X-Get-Flash: yes``. The
        whole ``Flash`` branch is removed from the session and the response
        gets ``{key: [{message, type, params}, ...]}`` as JSON. Anything else
        leaves both session and response untouched.
        """
        if not is_ajax(request) or not wants_flash_header(request):
            return response
        if not self.session.check(SESSION_BRANCH):
            return response

        branch = self.session.read(SESSION_BRANCH)
        if not isinstance(branch, Mapping):
            logger.error("Flash session branch is %s, expected a mapping", type(branch).__name__)
            raise MalformedFlashSessionError("Value for Flash setting must be a mapping.")
        for key, stack in branch.items():
            if not isinstance(stack, list):
                logger.error("Flash queue %r is %s, expected a list", key, type(stack).__name__)
                raise MalformedFlashSessionError(
                    f'Value for flash setting key "{key}" must be a list.', key=key
                )

        self.session.delete(SESSION_BRANCH)

        payload: dict[str, list[dict[str, Any]]] = {}
        for key, stack in branch.items():
            for entry in stack:
                record = entry if isinstance(entry, Mapping) else {}
                payload.setdefault(key, []).append(
                    {
                        "message": record.get("message"),
                        "type": record.get("type"),
                        "params": record.get("params"),
                    }
                )

        # Client-side script reads this header to show the messages
        response.headers[FLASH_HEADER] = json.dumps(payload, separators=(",", ":"))
        logger.debug("Flushed flash queues %s into %s header", sorted(payload), FLASH_HEADER)
        return response
