from pathlib import Path
from typing import Dict

import moderngl

DEFAULT_SHADER_DIR = Path(__file__).parent / "glsl"


class ShaderManager:
    def __init__(self, ctx: moderngl.Context, shader_dir: Path = DEFAULT_SHADER_DIR):
        self.ctx = ctx
        self.dir = Path(shader_dir)
        self._programs: Dict[str, moderngl.Program] = {}

    def get(self, name: str) -> moderngl.Program:
        """Compile `name` on first use and return the cached program after."""
        vert_path = self.dir / f"{name}.vert"
        frag_path = self.dir / f"{name}.frag"

        if not vert_path.exists() or not frag_path.exists():
            raise FileNotFoundError(f"Shader {name} missing in {self.dir}")

        if name not in self._programs:
            self._load(name, vert_path, frag_path)
        return self._programs[name]

    def _load(self, name: str, vert_path: Path, frag_path: Path):
        """Loads {name}.vert and {name}.frag and compiles them."""

        vert_src = vert_path.read_text()
        frag_src = frag_path.read_text()

        self._programs[name] = self.ctx.program(
            vertex_shader=vert_src, fragment_shader=frag_src
        )

    def release(self) -> None:
        for program in self._programs.values():
            program.release()
        self._programs.clear()
