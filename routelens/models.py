import json
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class RoutePrefix:
    prefix: str                         # e.g. /api/products
    router_name: str                    # identifier passed to app.use()
    file_path: str                      # file containing the app.use() call
    router_file: Optional[str] = None   # module the router identifier was imported from


@dataclass
class ParsedFile:
    path: str
    source: str
    ast: object
    language: str           # 'js' or 'ts'

    def snippet(self, node) -> str:
        rng = getattr(node, 'range', None)
        if not rng:
            return ''
        return self.source[rng[0]:rng[1]]


@dataclass
class BranchDetail:
    status: list = field(default_factory=list)
    json: list = field(default_factory=list)
    send: list = field(default_factory=list)
    headers: list = field(default_factory=list)     # [{'key': ..., 'value': ...}]

    def to_dict(self) -> dict:
        return {
            'status': list(self.status),
            'json': list(self.json),
            'send': list(self.send),
            'headers': [dict(h) for h in self.headers],
        }


@dataclass
class RouteResult:
    method: str             # GET, POST, ...
    path: str               # full path, prefix included
    req: dict               # {'headers': [...], 'params': [...], 'query': [...], 'body': [...]}
    default: BranchDetail
    branches: dict          # branch key -> BranchDetail
    source_file: str = ''

    def to_dict(self) -> dict:
        return {
            'method': self.method,
            'path': self.path,
            'req': {section: list(names) for section, names in self.req.items()},
            'responses': {
                'default': self.default.to_dict(),
                'branches': {key: detail.to_dict() for key, detail in self.branches.items()},
            },
        }


def routes_to_json(results: list, indent: int = 2) -> str:
    """Serialize analysis results into the JSON handed to prompt builders."""
    return json.dumps([r.to_dict() for r in results], indent=indent, ensure_ascii=False)
