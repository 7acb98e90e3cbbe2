"""Compiles and executes the text, alt text and tooltip templates."""

import logging
from typing import NamedTuple

from jinja2 import StrictUndefined, Template, TemplateSyntaxError
from jinja2.sandbox import SandboxedEnvironment

from waybar_weather.errors import RenderError, TemplateCompileError
from waybar_weather.presenter.funcs import TemplateFunctions
from waybar_weather.presenter.view import TemplateContext, WeatherView

logger = logging.getLogger(__name__)


class RenderedOutput(NamedTuple):
    text: str
    alt_text: str
    tooltip: str


class TemplateRenderer:
    """Holds the three compiled templates sharing one function library.

    Construction compiles every template and executes it once against a
    minimal context, so authoring errors surface before the first real
    render.
    """

    def __init__(
        self,
        text: str,
        alt_text: str,
        tooltip: str,
        functions: TemplateFunctions,
    ):
        self.env = SandboxedEnvironment(
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )
        self.env.globals.update(functions.as_globals())
        self.templates: dict[str, Template] = {
            "text": self._compile("text", text),
            "alt_text": self._compile("alt_text", alt_text),
            "tooltip": self._compile("tooltip", tooltip),
        }
        self._validate()

    def _compile(self, name: str, source: str) -> Template:
        try:
            return self.env.from_string(source)
        except TemplateSyntaxError as e:
            raise TemplateCompileError(f"failed to parse {name} template: {e}", name) from e

    def _validate(self) -> None:
        probe = TemplateContext(forecasts=(WeatherView(),))
        for name, template in self.templates.items():
            try:
                template.render(probe.template_vars())
            except Exception as e:
                raise TemplateCompileError(
                    f"failed to validate {name} template: {e}", name
                ) from e

    def render(self, ctx: TemplateContext) -> RenderedOutput:
        """Render all three templates; any failure aborts the whole call."""
        variables = ctx.template_vars()
        outputs: dict[str, str] = {}
        for name, template in self.templates.items():
            try:
                outputs[name] = template.render(variables)
            except Exception as e:
                logger.debug("Rendering %s template failed", name, exc_info=True)
                raise RenderError(f"failed to render {name} template: {e}", name) from e
        return RenderedOutput(**outputs)
