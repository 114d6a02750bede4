import pygame
from config import WIDTH, HEIGHT

class Camera:
    """Maps world space (origin at the arena centre) to screen pixels."""

    def __init__(self):
        self.x = -WIDTH / 2
        self.y = -HEIGHT / 2
        self.zoom = 1.0

    def to_screen(self, p):
        return (int((p[0] - self.x) * self.zoom), int((p[1] - self.y) * self.zoom))

    def to_world(self, p):
        return (p[0] / self.zoom + self.x, p[1] / self.zoom + self.y)

    def to_screen_rect(self, r: pygame.Rect):
        return pygame.Rect(
            int((r.x - self.x) * self.zoom),
            int((r.y - self.y) * self.zoom),
            int(r.w * self.zoom),
            int(r.h * self.zoom)
        )
