"""Resource configuration."""

from __future__ import annotations

from typing import Any

import structlog
from opentelemetry.sdk.resources import _DEFAULT_RESOURCE, SERVICE_NAME, Resource

from budautoconf._internal.config import ConfigProperties
from budautoconf._internal.constants import DEFAULT_SERVICE_NAME, RESOURCE_ATTRIBUTES
from budautoconf._internal.constants import SERVICE_NAME as SERVICE_NAME_PROPERTY
from budautoconf._internal.customizers import Customizer

logger = structlog.get_logger(__name__)


def configure_resource(config: ConfigProperties, customizer: Customizer[Resource]) -> Resource:
    """Create the resource shared by every provider.

    ``otel.resource.attributes`` supplies arbitrary attributes and
    ``otel.service.name`` overrides ``service.name``. Only ``config`` is
    read: the SDK's environment detector is not run, so a snapshot given to
    the builder fully determines the resource. The customizer then sees the
    complete resource and its return value is used as-is.
    """
    attributes: dict[str, Any] = dict(config.get_map(RESOURCE_ATTRIBUTES))
    service_name = config.get_string(SERVICE_NAME_PROPERTY)
    if service_name is not None:
        attributes[SERVICE_NAME] = service_name

    base = _DEFAULT_RESOURCE.merge(Resource({SERVICE_NAME: DEFAULT_SERVICE_NAME}))
    resource = customizer(base.merge(Resource(attributes)), config)
    logger.debug("resource_configured", attributes=dict(resource.attributes))
    return resource
