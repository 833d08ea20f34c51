from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

import pygame

from block_blast.game import BlockBlastGame, GameConfig, GameStore, Move, get_shape


logger = logging.getLogger(__name__)

DEFAULT_SAVE_PATH = Path.home() / ".block_blast" / "save.json"

HINT_FLASH_MS = 120
HINT_FLASHES = 7


def _color_for_value(v: int) -> tuple[int, int, int]:
    return (40, 40, 48) if v == 0 else (70, 200, 120)


def draw_board(screen: pygame.Surface, grid, cell_size: int, margin: int) -> None:
    h, w = grid.shape
    screen.fill((15, 15, 20))
    for y in range(h):
        for x in range(w):
            rect = pygame.Rect(margin + x * cell_size, margin + y * cell_size, cell_size - 1, cell_size - 1)
            pygame.draw.rect(screen, _color_for_value(int(grid[y, x])), rect)


def draw_tray(screen: pygame.Surface, game: BlockBlastGame, cell_size: int, margin: int,
              selected_slot: int) -> None:
    # Draw the 3 tray pieces at the right side
    x0 = margin * 2 + game.state.board.size * cell_size
    y0 = margin
    for slot, shape in enumerate(game.tray_shapes()):
        off_y = y0 + slot * (cell_size * 5)
        if shape is None:
            continue
        for x, y in shape.cells:
            rect = pygame.Rect(x0 + x * cell_size, off_y + y * cell_size, cell_size - 1, cell_size - 1)
            pygame.draw.rect(screen, (200, 180, 60), rect)
        if slot == selected_slot:
            outline = pygame.Rect(x0, off_y, shape.width * cell_size, shape.height * cell_size)
            pygame.draw.rect(screen, (255, 255, 255), outline, 2)


def draw_ghost(screen: pygame.Surface, game: BlockBlastGame, row: int, col: int, cell_size: int,
               margin: int, selected_slot: int) -> None:
    shapes = game.tray_shapes()
    if not (0 <= selected_slot < len(shapes)) or shapes[selected_slot] is None:
        return
    shape = shapes[selected_slot]
    color = (120, 220, 140) if game.can_place(shape, row, col) else (220, 120, 120)
    size = game.state.board.size
    for r, c in shape.cells_at(row, col):
        if 0 <= r < size and 0 <= c < size:
            rect = pygame.Rect(margin + c * cell_size, margin + r * cell_size, cell_size - 1, cell_size - 1)
            pygame.draw.rect(screen, color, rect, 2)


def draw_hint(screen: pygame.Surface, move: Move, cell_size: int, margin: int) -> None:
    for r, c in get_shape(move.shape_id).cells_at(move.row, move.col):
        rect = pygame.Rect(margin + c * cell_size, margin + r * cell_size, cell_size - 1, cell_size - 1)
        pygame.draw.rect(screen, (120, 170, 255), rect)


class HintFlash:
    """Blinks a hint placement a few times; any other command cancels it."""

    def __init__(self) -> None:
        self.move: Optional[Move] = None
        self.started_at = 0

    def start(self, move: Move, now: int) -> None:
        self.move = move
        self.started_at = now

    def cancel(self) -> None:
        self.move = None

    def visible(self, now: int) -> bool:
        if self.move is None:
            return False
        tick = (now - self.started_at) // HINT_FLASH_MS
        if tick >= HINT_FLASHES:
            self.move = None
            return False
        return tick % 2 == 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Block Blast in a pygame window")
    p.add_argument("--save-path", type=Path, default=DEFAULT_SAVE_PATH)
    p.add_argument("--no-save", action="store_true", help="Do not load or write a saved game")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", type=str, default="INFO")
    return p


def run(store: Optional[GameStore] = None, seed: Optional[int] = None) -> None:
    config = GameConfig(random_seed=seed)
    saved = store.load() if store is not None else None
    game = BlockBlastGame(config, state=saved)

    def save() -> None:
        if store is not None:
            store.save(game.state)

    pygame.init()
    try:
        cell_size = 30
        margin = 20
        board_px = game.state.board.size * cell_size
        side_panel_w = 8 * cell_size
        width = margin * 3 + board_px + side_panel_w
        height = margin * 2 + board_px
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Block Blast (10x10)")
        font = pygame.font.SysFont(None, 24)

        selected_slot = -1
        hint = HintFlash()

        key_to_slot = {
            pygame.K_1: 0,
            pygame.K_2: 1,
            pygame.K_3: 2,
            pygame.K_KP1: 0,
            pygame.K_KP2: 1,
            pygame.K_KP3: 2,
        }

        running = True
        clock = pygame.time.Clock()
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in key_to_slot:
                        slot = key_to_slot[event.key]
                        if not game.state.used[slot]:
                            selected_slot = slot
                    elif event.key == pygame.K_u:
                        hint.cancel()
                        if game.undo():
                            selected_slot = -1
                            save()
                    elif event.key == pygame.K_h:
                        move = game.hint()
                        if move is None:
                            logger.info("no moves available")
                        else:
                            hint.start(move, pygame.time.get_ticks())
                    elif event.key == pygame.K_n:
                        hint.cancel()
                        game.new_game()
                        selected_slot = -1
                        save()
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    mx, my = event.pos
                    row = (my - margin) // cell_size
                    col = (mx - margin) // cell_size
                    shapes = game.tray_shapes()
                    if 0 <= selected_slot < len(shapes) and shapes[selected_slot] is not None:
                        if game.can_place(shapes[selected_slot], row, col):
                            hint.cancel()
                            result = game.place(selected_slot, row, col)
                            selected_slot = -1
                            save()
                            if result.game_over:
                                logger.info("game over: score %d, best %d", game.state.score, game.state.best)

            # Draw
            draw_board(screen, game.state.board.grid, cell_size, margin)
            now = pygame.time.get_ticks()
            if hint.move is not None and hint.visible(now):
                draw_hint(screen, hint.move, cell_size, margin)
            mx, my = pygame.mouse.get_pos()
            draw_ghost(screen, game, (my - margin) // cell_size, (mx - margin) // cell_size,
                       cell_size, margin, selected_slot)
            draw_tray(screen, game, cell_size, margin, selected_slot)
            info_lines = [
                f"Score: {game.state.score}",
                f"Best: {game.state.best}",
                "Select: 1/2/3, place: left click",
                "Undo: U  Hint: H  New: N",
            ]
            x_text = margin * 2 + board_px
            y_text = margin + 5 * cell_size * 3 + 10
            for i, txt in enumerate(info_lines):
                img = font.render(txt, True, (230, 230, 230))
                screen.blit(img, (x_text, y_text + i * 20))
            if game.is_game_over():
                over = font.render("Game Over - U to undo, N for a new game", True, (255, 100, 100))
                screen.blit(over, (margin, 2))

            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")
    store = None if args.no_save else GameStore(args.save_path)
    run(store, seed=args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
