import math

import pygame

from .algorithms import Algorithm
from .pacing import speed_label
from .session import Mode
from .settings import (MAX_ARRAY_SIZE, MAX_SPEED, MIN_ARRAY_SIZE, MIN_SPEED,
                       UI_ACCENT, UI_BG, UI_BORDER, UI_DIM, UI_GREEN, UI_HOVER,
                       UI_PANEL, UI_PANEL2, UI_SEL_B_BG, UI_SEL_B_BORDER, UI_SEL_BG,
                       UI_SEL_BORDER, UI_SUBTEXT, UI_TEXT, WINDOW_HEIGHT, WINDOW_WIDTH)

# ============================================================
# ========================= LAYOUT CONSTANTS =================
# ============================================================

COLS    = 3
BTN_W   = 220
BTN_H   = 42
BTN_GAP = 5
COL_GAP = 8
PAD     = 16
GRID_W  = COLS * BTN_W + (COLS-1) * COL_GAP
RX      = PAD + GRID_W + 18
RW      = WINDOW_WIDTH - RX - PAD

_Y_SETTINGS = 88
_Y_SIZE     = 108
_Y_SPEED    = 162
_Y_MODE     = 218
_Y_SOUND    = 256
_Y_DATA     = 300
_Y_SELECTED = 402

ALLOWED_INPUT = set("0123456789,- ")
MAX_INPUT_LEN = 600

# ============================================================
# ========================= UI WIDGETS =======================
# ============================================================

class Slider:
    """Single-knob integer slider."""
    KNOB_RADIUS = 6

    def __init__(self, x, y, w, lo, hi, val, label, fmt=str):
        self.x, self.y, self.w = x, y, w
        self.lo, self.hi = lo, hi
        self.value = val
        self.label = label
        self.fmt   = fmt
        self.drag  = False
        self.track = pygame.Rect(x, y+18, w, 4)
        self.hit   = pygame.Rect(x-5, y, w+10, 38)

    def _r(self):
        return (self.value - self.lo) / (self.hi - self.lo)

    def _kx(self):
        return int(self.x + self._r() * self.w)

    def handle(self, ev):
        """Returns True when the value changed."""
        before = self.value
        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if math.hypot(ev.pos[0]-self._kx(), ev.pos[1]-self.track.centery) < 14 \
               or self.hit.collidepoint(ev.pos):
                self.drag = True; self._set(ev.pos[0])
        elif ev.type == pygame.MOUSEBUTTONUP:
            self.drag = False
        elif ev.type == pygame.MOUSEMOTION and self.drag:
            self._set(ev.pos[0])
        return self.value != before

    def _set(self, mx):
        r = max(0.0, min(1.0, (mx - self.x) / self.w))
        self.value = int(round(self.lo + r * (self.hi - self.lo)))

    def draw(self, s, fonts):
        s.blit(fonts['small'].render(f"{self.label}:  {self.fmt(self.value)}", True, UI_SUBTEXT),
               (self.x, self.y))
        pygame.draw.rect(s, UI_BORDER, self.track, border_radius=2)
        fw = int(self._r() * self.w)
        if fw > 0: pygame.draw.rect(s, UI_ACCENT, (self.x, self.track.y, fw, 4), border_radius=2)
        kx, ky = self._kx(), self.track.centery
        pygame.draw.circle(s, UI_PANEL2, (kx, ky), self.KNOB_RADIUS)
        pygame.draw.circle(s, UI_ACCENT, (kx, ky), self.KNOB_RADIUS, 2)
        pygame.draw.circle(s, UI_ACCENT, (kx, ky), 2)


class AlgoBtn:
    H = BTN_H
    def __init__(self, x, y, w, algorithm, idx):
        self.rect = pygame.Rect(x, y, w, self.H)
        self.algorithm, self.idx = algorithm, idx

    def draw(self, s, fonts, sel_a, sel_b, hov):
        if sel_a:   bg, br = UI_SEL_BG, UI_SEL_BORDER
        elif sel_b: bg, br = UI_SEL_B_BG, UI_SEL_B_BORDER
        else:       bg, br = (UI_HOVER if hov else UI_PANEL), (UI_DIM if hov else UI_BORDER)
        pygame.draw.rect(s, bg, self.rect, border_radius=5)
        pygame.draw.rect(s, br, self.rect, 1, border_radius=5)
        sel = sel_a or sel_b
        tc = UI_TEXT if (sel or hov) else (150, 150, 170)
        tag = "A" if sel_a else ("B" if sel_b else f"{self.idx+1:02d}")
        s.blit(fonts['mono_sm'].render(tag, True, br if sel else UI_SUBTEXT),
               (self.rect.x+10, self.rect.y+14))
        s.blit(fonts['mid'].render(self.algorithm.title, True, tc), (self.rect.x+40, self.rect.y+12))


class SmBtn:
    def __init__(self, x, y, w, h, lbl):
        self.rect = pygame.Rect(x, y, w, h); self.label = lbl
    def draw(self, s, fonts, act=False, hov=False):
        bg = UI_ACCENT if act else (UI_HOVER if hov else UI_PANEL2)
        fc = (0, 0, 0) if act else UI_TEXT
        pygame.draw.rect(s, bg,        self.rect, border_radius=5)
        pygame.draw.rect(s, UI_BORDER, self.rect, 1, border_radius=5)
        t = fonts['small'].render(self.label, True, fc)
        s.blit(t, t.get_rect(center=self.rect.center))


class TextField:
    """One-line input for comma separated numbers."""

    def __init__(self, x, y, w, h, placeholder=""):
        self.rect = pygame.Rect(x, y, w, h)
        self.text = ""
        self.placeholder = placeholder
        self.focus = False

    def handle(self, ev):
        """Returns True when Enter was pressed while focused."""
        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            self.focus = self.rect.collidepoint(ev.pos)
        elif ev.type == pygame.KEYDOWN and self.focus:
            if ev.key == pygame.K_RETURN:
                return True
            if ev.key == pygame.K_BACKSPACE:
                self.text = self.text[:-1]
            elif ev.unicode and ev.unicode in ALLOWED_INPUT and len(self.text) < MAX_INPUT_LEN:
                self.text += ev.unicode
        return False

    def draw(self, s, fonts):
        pygame.draw.rect(s, UI_PANEL2, self.rect, border_radius=5)
        pygame.draw.rect(s, UI_ACCENT if self.focus else UI_BORDER, self.rect, 1, border_radius=5)
        shown = self.text or self.placeholder
        col   = UI_TEXT if self.text else UI_DIM
        t = fonts['mono_sm'].render(shown, True, col)
        # keep the caret end visible
        clip = max(0, t.get_width() - (self.rect.width - 16))
        s.blit(t, (self.rect.x + 8, self.rect.y + 8), pygame.Rect(clip, 0, self.rect.width - 16, t.get_height()))


# ============================================================
# ========================= MENU =============================
# ============================================================

class Menu:
    """
    Configuration screen. Left click picks algorithm A, right click picks B
    (compare mode). Writes straight into the controller's SessionContext.
    """

    def __init__(self, screen, fonts, controller, audio):
        self.screen     = screen
        self.fonts      = fonts
        self.controller = controller
        self.ctx        = controller.context
        self.audio      = audio
        self.sel_a      = 0
        self.sel_b      = 1
        self.hov        = -1
        self.msg        = ""
        self.msg_until  = 0
        self.msg_ok     = True
        self.confirming = False

        self.algorithms = list(Algorithm)
        gx, gy = PAD, 80
        self.btns = []
        for i, algo in enumerate(self.algorithms):
            col = i % COLS; row = i // COLS
            self.btns.append(AlgoBtn(gx + col*(BTN_W+COL_GAP), gy + row*(BTN_H+BTN_GAP), BTN_W, algo, i))

        self.sl_size  = Slider(RX, _Y_SIZE, RW, MIN_ARRAY_SIZE, MAX_ARRAY_SIZE,
                               len(self.ctx.source), "Array Size")
        self.sl_speed = Slider(RX, _Y_SPEED, RW, MIN_SPEED, MAX_SPEED, self.ctx.speed, "Speed",
                               fmt=lambda v: f"{v} ({speed_label(v)})")

        half = (RW - 6) // 2
        self.single_btn  = SmBtn(RX, _Y_MODE, half, 28, "Single")
        self.compare_btn = SmBtn(RX + half + 6, _Y_MODE, half, 28, "Compare")
        self.sound_btn   = SmBtn(RX, _Y_SOUND, RW, 30, "")
        self.input       = TextField(RX, _Y_DATA + 18, RW - 76, 30, "e.g. 5, 3, 8, 1")
        self.load_btn    = SmBtn(RX + RW - 70, _Y_DATA + 18, 70, 30, "Load")
        self.random_btn  = SmBtn(RX, _Y_DATA + 56, RW, 28, "Randomize")

        self.start_rect = pygame.Rect(RX, WINDOW_HEIGHT-62, RW, 46)
        self.start_hov  = False

    def notify(self, msg, ok=True):
        self.msg = msg; self.msg_ok = ok
        self.msg_until = pygame.time.get_ticks() + 4000

    def selection(self):
        return self.algorithms[self.sel_a], self.algorithms[self.sel_b]

    def handle(self, ev):
        if self.confirming:
            return self._handle_confirm(ev)

        if self.sl_size.handle(ev):
            self.controller.randomize(self.sl_size.value)
        if self.sl_speed.handle(ev):
            self.ctx.speed = self.sl_speed.value
        if self.input.handle(ev):
            self._load_manual()

        if ev.type == pygame.MOUSEMOTION:
            self.hov = -1
            self.start_hov = self.start_rect.collidepoint(ev.pos)
            for b in self.btns:
                if b.rect.collidepoint(ev.pos): self.hov = b.idx

        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button in (1, 3):
            for b in self.btns:
                if b.rect.collidepoint(ev.pos):
                    if ev.button == 1: self.sel_a = b.idx
                    else:              self.sel_b = b.idx

        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self.single_btn.rect.collidepoint(ev.pos):  self.ctx.mode = Mode.SINGLE
            if self.compare_btn.rect.collidepoint(ev.pos): self.ctx.mode = Mode.COMPARE
            if self.sound_btn.rect.collidepoint(ev.pos):
                self.audio.enabled = not self.audio.enabled
            if self.load_btn.rect.collidepoint(ev.pos):
                self._load_manual()
            if self.random_btn.rect.collidepoint(ev.pos):
                self.controller.randomize(self.sl_size.value)
                self.notify("DATA_RANDOMIZED")
            if self.start_rect.collidepoint(ev.pos):
                return self._request_start()

        return None

    def _request_start(self):
        if self.controller.needs_confirmation(self.selection()):
            self.confirming = True
            return None
        return "start"

    def _handle_confirm(self, ev):
        if ev.type != pygame.KEYDOWN:
            return None
        if ev.key == pygame.K_y:
            self.confirming = False
            return "start_confirmed"
        if ev.key in (pygame.K_n, pygame.K_ESCAPE):
            self.confirming = False
            self.notify("Bogo Sort cancelled", ok=False)
        return None

    def _load_manual(self):
        if self.controller.load_manual(self.input.text):
            self.sl_size.value = len(self.ctx.source)
            self.notify(f"CUSTOM_DATA_LOADED ({len(self.ctx.source)} values)")
        else:
            self.notify("Need at least two integers", ok=False)

    def draw(self):
        s  = self.screen
        mp = pygame.mouse.get_pos()
        f  = self.fonts
        s.fill(UI_BG)

        t1 = f['title'].render("SortArena", True, UI_TEXT)
        t2 = f['title'].render("SortArena", True, UI_ACCENT)
        s.blit(t2, (PAD+1, 23)); s.blit(t1, (PAD, 22))
        s.blit(f['small'].render("left click: A   right click: B", True, UI_SUBTEXT),
               (PAD + t1.get_width() + 12, 31))
        pygame.draw.line(s, UI_BORDER, (PAD, 68), (WINDOW_WIDTH-PAD, 68), 1)

        compare = self.ctx.mode is Mode.COMPARE
        for b in self.btns:
            b.draw(s, f, b.idx == self.sel_a, compare and b.idx == self.sel_b and b.idx != self.sel_a,
                   b.idx == self.hov)

        now = pygame.time.get_ticks()
        if self.msg and now < self.msg_until:
            col = UI_GREEN if self.msg_ok else (255, 90, 90)
            s.blit(f['small'].render(self.msg, True, col), (PAD, self.btns[-1].rect.bottom + 12))
        elif now >= self.msg_until:
            self.msg = ""

        panel = pygame.Rect(RX-10, 76, RW+20, WINDOW_HEIGHT-82)
        pygame.draw.rect(s, UI_PANEL,  panel, border_radius=7)
        pygame.draw.rect(s, UI_BORDER, panel, 1, border_radius=7)
        s.blit(f['small'].render("SETTINGS", True, UI_SUBTEXT), (RX, _Y_SETTINGS))

        self.sl_size.draw(s, f)
        self.sl_speed.draw(s, f)
        self.single_btn.draw(s, f, not compare, self.single_btn.rect.collidepoint(mp))
        self.compare_btn.draw(s, f, compare, self.compare_btn.rect.collidepoint(mp))
        self.sound_btn.label = "Sound: ON" if self.audio.enabled else "Sound: OFF"
        self.sound_btn.draw(s, f, self.audio.enabled, self.sound_btn.rect.collidepoint(mp))

        s.blit(f['small'].render("Manual values:", True, UI_SUBTEXT), (RX, _Y_DATA))
        self.input.draw(s, f)
        self.load_btn.draw(s, f, False, self.load_btn.rect.collidepoint(mp))
        self.random_btn.draw(s, f, False, self.random_btn.rect.collidepoint(mp))

        a, b = self.selection()
        s.blit(f['small'].render("Selected:", True, UI_SUBTEXT), (RX, _Y_SELECTED))
        s.blit(f['mid'].render(f"A  {a.title}", True, UI_ACCENT), (RX, _Y_SELECTED+16))
        if compare:
            s.blit(f['mid'].render(f"B  {b.title}", True, UI_SEL_B_BORDER), (RX, _Y_SELECTED+38))
        s.blit(f['small'].render("ESC stops a sort  -  Up/Down change speed", True, UI_DIM),
               (RX, _Y_SELECTED+64))

        sh = self.start_hov
        pygame.draw.rect(s, (240,50,50) if sh else (200,35,35), self.start_rect, border_radius=7)
        pygame.draw.rect(s, (255,90,90) if sh else UI_ACCENT,   self.start_rect, 2, border_radius=7)
        st2 = f['big'].render("> START", True, (255, 255, 255))
        s.blit(st2, st2.get_rect(center=self.start_rect.center))

        if self.confirming:
            self._draw_confirm()

        pygame.display.flip()

    def _draw_confirm(self):
        s = self.screen
        shade = pygame.Surface((WINDOW_WIDTH, WINDOW_HEIGHT), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 170))
        s.blit(shade, (0, 0))
        box = pygame.Rect(0, 0, 560, 120); box.center = (WINDOW_WIDTH // 2, WINDOW_HEIGHT // 2)
        pygame.draw.rect(s, UI_PANEL, box, border_radius=7)
        pygame.draw.rect(s, UI_ACCENT, box, 2, border_radius=7)
        n = len(self.ctx.source)
        l1 = self.fonts['mid'].render(f"Bogo Sort on {n} elements might run forever.", True, UI_TEXT)
        l2 = self.fonts['small'].render("Continue?   [Y] yes    [N] no", True, UI_SUBTEXT)
        s.blit(l1, l1.get_rect(center=(box.centerx, box.y + 42)))
        s.blit(l2, l2.get_rect(center=(box.centerx, box.y + 80)))
