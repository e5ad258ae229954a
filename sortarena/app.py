import logging
import sys
import threading

import pygame

from .pacing import speed_label
from .render import BarViewport
from .session import Mode, SessionContext, SessionController, SessionStatus
from .settings import (FPS, UI_BG, UI_DIM, UI_GREEN, UI_SUBTEXT, UI_TEXT,
                       WINDOW_HEIGHT, WINDOW_WIDTH)
from .sound import init_sound
from .ui import Menu, PAD

log = logging.getLogger(__name__)

SPEED_KEY_STEP = 5


def build_fonts():
    def tf(names, sz):
        for n in names:
            try: return pygame.font.SysFont(n, sz)
            except (pygame.error, OSError): pass
        return pygame.font.SysFont(None, sz)
    mono = ["Consolas", "Courier New", "Lucida Console"]
    sans = ["Segoe UI", "Tahoma", "Arial"]
    return dict(title=tf(mono, 26), big=tf(sans, 22), mid=tf(sans, 17),
                small=tf(sans, 13), mono_sm=tf(mono, 12))


def _quit(controller, audio):
    controller.stop()
    audio.stop()
    pygame.quit()
    sys.exit()


def run_sort(screen, fonts, controller, audio, algorithms, confirmed=False):
    """Sort screen: runs the session on a worker thread and draws its viewports."""
    ctx = controller.context
    sides = 2 if ctx.mode is Mode.COMPARE else 1
    viewports = {label: BarViewport(f"{label}: {algo.title}", ctx.source, ctx.peak)
                 for label, algo in zip(controller.LABELS, algorithms[:sides])}
    controller.viewport_factory = viewports.__getitem__

    # cleared here, not on the worker, so an early ESC is not lost
    ctx.cancel.clear()
    result = []
    worker = threading.Thread(target=lambda: result.append(
        controller.start(algorithms, confirm=lambda: confirmed, reset_stop=False)),
        name="session", daemon=True)
    worker.start()

    clock = pygame.time.Clock()
    area = pygame.Rect(PAD, PAD, WINDOW_WIDTH - 2*PAD, WINDOW_HEIGHT - 2*PAD - 34)
    gap = 10
    width = (area.width - gap * (sides - 1)) // sides
    rects = [pygame.Rect(area.x + i*(width + gap), area.y, width, area.height) for i in range(sides)]

    while True:
        clock.tick(FPS)
        done = not worker.is_alive()
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                _quit(controller, audio)
            if ev.type == pygame.KEYDOWN:
                if done:
                    return result[0] if result else None
                if ev.key == pygame.K_ESCAPE: controller.stop()
                if ev.key == pygame.K_UP:     ctx.speed = ctx.speed + SPEED_KEY_STEP
                if ev.key == pygame.K_DOWN:   ctx.speed = ctx.speed - SPEED_KEY_STEP
            if ev.type == pygame.MOUSEBUTTONDOWN and done:
                return result[0] if result else None

        screen.fill(UI_BG)
        for vp, rect in zip(viewports.values(), rects):
            vp.draw(screen, rect, fonts)

        if not done:
            status, col = "PROCESSING...", UI_TEXT
        elif result and result[0] is SessionStatus.COMPLETE:
            status, col = "COMPLETE", UI_GREEN
        else:
            status, col = "ABORTED", (255, 90, 90)
        line = f"{status}    speed {ctx.speed} ({speed_label(ctx.speed)})"
        screen.blit(fonts['mid'].render(line, True, col), (PAD, WINDOW_HEIGHT - PAD - 24))
        hint = "any key returns to menu" if done else "ESC stop   Up/Down speed"
        h = fonts['small'].render(hint, True, UI_DIM if done else UI_SUBTEXT)
        screen.blit(h, (WINDOW_WIDTH - PAD - h.get_width(), WINDOW_HEIGHT - PAD - 20))
        pygame.display.flip()


def main():
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    pygame.init()
    audio = init_sound()
    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
    pygame.display.set_caption("SortArena")
    fonts = build_fonts(); clock = pygame.time.Clock()

    controller = SessionController(SessionContext(), audio=audio)
    menu = Menu(screen, fonts, controller, audio)

    while True:
        clock.tick(FPS)
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                _quit(controller, audio)
            if ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE \
               and not menu.confirming and not menu.input.focus:
                _quit(controller, audio)
            action = menu.handle(ev)
            if action in ("start", "start_confirmed"):
                status = run_sort(screen, fonts, controller, audio, menu.selection(),
                                  confirmed=action == "start_confirmed")
                if status is not None:
                    menu.notify(status.value.upper(), ok=status is SessionStatus.COMPLETE)
                menu.sl_speed.value = controller.context.speed
                break
        menu.draw()


if __name__ == "__main__":
    main()
