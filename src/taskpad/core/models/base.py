"""模型基类 -- camelCase 序列化 + 输入解析

对外 JSON 统一使用 camelCase 键（dueDate、createdAt），
Python 侧字段保持 snake_case。
"""

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class CamelModel(BaseModel):
    """camelCase 别名基类，同时接受 snake_case 字段名"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_public(self) -> dict[str, Any]:
        """序列化为响应 JSON（camelCase，排除 exclude 字段）"""
        return self.model_dump(mode="json", by_alias=True)


def parse_input(model_cls: type[ModelT], data: ModelT | Mapping[str, Any]) -> ModelT:
    """将客户端输入解析为模型实例

    已是模型实例时直接返回；否则校验，失败时转换为业务 ValidationError。
    """
    if isinstance(data, model_cls):
        return data
    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(fields=field_errors(e.errors())) from e


def field_errors(errors: list[Any]) -> list[dict[str, str]]:
    """将 pydantic/FastAPI 错误列表转换为字段级明细

    FastAPI 的 loc 以 body/query/path 开头，这里去掉来源前缀。
    """
    result = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        result.append(
            {
                "field": ".".join(loc) or "body",
                "message": str(err.get("msg", "Invalid value")),
            }
        )
    return result
