"""
Shared helpers for API route modules.

Converts request bodies into engine option records so that individual route
files stay thin.  Request fields left as ``None`` fall back to the option's
``settings`` default.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import fields
from typing import Type, TypeVar

from pydantic import BaseModel

_T = TypeVar("_T")


def to_options(req: BaseModel, options_cls: Type[_T]) -> _T:
    names = {f.name for f in fields(options_cls)}
    values = {
        name: value
        for name, value in req.model_dump(exclude={"points"}).items()
        if name in names and value is not None
    }
    return options_cls(**values)
