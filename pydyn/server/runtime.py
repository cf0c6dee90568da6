from typing import Any, Mapping, cast

from pynvim_pp.lib import decode
from pynvim_pp.nvim import Nvim
from pynvim_pp.types import NoneType
from std2.configparser import hydrate
from std2.graphlib import merge
from std2.pickle.decoder import new_decoder
from yaml import safe_load

from ..consts import CONFIG_YML, SETTINGS_VAR
from ..shared.settings import Settings
from .rt_types import Stack, ValidationError

_DECODER = new_decoder[Settings](Settings)


def load_settings(user_config: Any) -> Settings:
    """
    Raises `DecodeError` or `ValidationError`
    """

    yml = safe_load(decode(CONFIG_YML.read_bytes()))
    u_conf = hydrate(user_config or {})
    if not isinstance(u_conf, Mapping):
        raise ValidationError(f"g:{SETTINGS_VAR} must be a dictionary")

    merged = merge(yml, u_conf, replace=True)
    config = _DECODER(merged)

    if config.limits.timeout <= 0:
        raise ValidationError("limits.timeout <= 0")
    if not config.completion.trigger_chars:
        raise ValidationError("completion.trigger_chars is empty")

    return config


async def stack() -> Stack:
    user_config = cast(Any, await Nvim.vars.get(NoneType, SETTINGS_VAR))
    settings = load_settings(user_config)
    return Stack(settings=settings)
