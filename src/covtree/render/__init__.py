from covtree.render.render import RenderOptions, render

__all__ = ["RenderOptions", "render"]
