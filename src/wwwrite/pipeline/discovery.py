from pathlib import Path
from typing import List, Optional

from wwwrite.schemas import PackageInfo
from .config import PipelineConfig


def find_declaration_files(package: PackageInfo, config: Optional[PipelineConfig] = None) -> List[Path]:
    """Declaration files of a package, <package>/<flow_dir>/<flow_glob>, sorted."""
    config = config or PipelineConfig()
    flow_dir = Path(package.directory) / config.flow_dir
    if not flow_dir.is_dir():
        return []
    return sorted(p for p in flow_dir.glob(config.flow_glob) if p.is_file())


def output_path_for(source: Path, package: PackageInfo, config: Optional[PipelineConfig] = None) -> Path:
    """Same base name, under <package>/<output_dir>."""
    config = config or PipelineConfig()
    return Path(package.directory) / config.output_dir / source.name
