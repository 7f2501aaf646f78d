"""
JSON / YAML 文件读写。

根据文件扩展名自动判断格式：

- ``.json`` → JSON（2 空格缩进）
- ``.yaml`` / ``.yml`` → YAML（块格式，保持键顺序）
- 其他扩展名：读取时先试 JSON 再试 YAML，写出时使用 YAML
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal

import yaml

from hyperlane_cli.errors import FileFormatError

logger = logging.getLogger(__name__)

FileFormat = Literal["json", "yaml"]


def resolve_file_format(file_path: str | Path) -> FileFormat | None:
    """根据扩展名判断文件格式，无法判断时返回 None。"""
    suffix = Path(file_path).suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix in (".yaml", ".yml"):
        return "yaml"
    return None


def read_yaml_or_json(file_path: str | Path) -> dict[str, Any]:
    """
    从文件加载 JSON 或 YAML 数据。

    参数:
        file_path: 文件路径

    返回:
        解析后的字典

    异常:
        FileFormatError: 文件不存在、无法读取、格式无效或根元素不是 mapping
    """
    path = Path(file_path)

    if not path.exists():
        raise FileFormatError(
            what=f"文件 '{path}' 不存在。",
            why=f"在路径 '{path.absolute()}' 下未找到该文件。",
            how="请检查 --config 参数是否正确，"
                "可以使用 'hyperlane core configure' 生成 Core Config 文件。",
            file_path=str(path),
        )

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileFormatError(
            what=f"无法读取文件 '{path}'。",
            why=str(e),
            how="请检查文件权限和编码（需要 UTF-8）。",
            file_path=str(path),
        ) from e

    file_format = resolve_file_format(path)
    try:
        if file_format == "json":
            data = json.loads(content)
        elif file_format == "yaml":
            data = yaml.safe_load(content)
        else:
            try:
                data = json.loads(content)
            except json.JSONDecodeError:
                data = yaml.safe_load(content)
    except json.JSONDecodeError as e:
        raise FileFormatError(
            what=f"文件 '{path}' 的 JSON 格式无效。",
            why=str(e),
            how="请检查 JSON 语法（逗号、引号、括号是否匹配）。",
            file_path=str(path),
        ) from e
    except yaml.YAMLError as e:
        raise FileFormatError(
            what=f"文件 '{path}' 的 YAML 格式无效。",
            why=str(e),
            how="请使用 YAML 格式校验工具检查文件语法。",
            file_path=str(path),
        ) from e

    if not isinstance(data, dict):
        raise FileFormatError(
            what=f"文件 '{path}' 的根元素必须是字典（mapping）。",
            why=f"实际类型为 {type(data).__name__}。",
            how="请确保文件的根元素是键值对形式，例如：\n"
                "  owner: '0x...'\n"
                "  defaultIsm:\n"
                "    type: trustedRelayerIsm",
            file_path=str(path),
        )

    logger.debug("已读取 %s（%d 个顶层字段）", path, len(data))
    return data


def dump_yaml_or_json(data: Any, file_format: FileFormat = "yaml") -> str:
    """把数据序列化为 JSON 或 YAML 字符串。"""
    if file_format == "json":
        return json.dumps(data, ensure_ascii=False, indent=2) + "\n"
    return yaml.safe_dump(
        data,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def write_yaml_or_json(
    file_path: str | Path,
    data: Any,
    file_format: FileFormat | None = None,
) -> Path:
    """
    把数据写入 JSON 或 YAML 文件，父目录不存在时自动创建。

    参数:
        file_path: 目标路径
        data: 可序列化的数据（dict / list / 标量）
        file_format: 强制指定格式；None 时按扩展名判断，无法判断则使用 YAML

    返回:
        写入的文件路径
    """
    path = Path(file_path)
    resolved = file_format or resolve_file_format(path) or "yaml"

    try:
        text = dump_yaml_or_json(data, resolved)
    except (TypeError, ValueError, yaml.YAMLError) as e:
        raise FileFormatError(
            what=f"无法序列化写入 '{path}' 的数据。",
            why=str(e),
            how="请确保数据只包含字符串、数字、布尔、列表和字典。",
            file_path=str(path),
        ) from e

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise FileFormatError(
            what=f"无法写入文件 '{path}'。",
            why=str(e),
            how="请检查目录权限或更换输出路径。",
            file_path=str(path),
        ) from e

    logger.debug("已写入 %s（格式：%s）", path, resolved)
    return path
