import argparse
import logging
import shlex
import traceback
from dataclasses import replace
from typing import Optional

from prompt_toolkit import prompt
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import FileHistory

from .config import Config, load_config
from .game import Claim, ClaimData, GameState
from .position import Position
from .utils import format_hash, hash_from_hex


logger = logging.getLogger(__name__)


class ActionArgumentCompleter(Completer):
    ACTION_ARGUMENTS = {
        "attack": [],
        "claim": ["gindex=", "value=", "parent="],
        "defend": [],
        "defends": [],
        "dup": ["gindex=", "value="],
        "help": [],
        "list": [],
        "parent": [],
        "pos": [],
        "relative": ["depth="],
        "trace": ["max_depth="],
    }

    def get_completions(self, document, complete_event):
        word_before_cursor = document.get_word_before_cursor(WORD=True)

        if ' ' not in document.text:
            # user is typing the action
            for action in self.ACTION_ARGUMENTS.keys():
                if action.startswith(word_before_cursor):
                    yield Completion(action, start_position=-len(word_before_cursor))
        else:
            # user is typing an argument, find which are valid
            action = document.text.split()[0]
            for argument in self.ACTION_ARGUMENTS.get(action, []):
                if argument not in document.text and argument.startswith(word_before_cursor):
                    yield Completion(argument, start_position=-len(word_before_cursor))


actions = list(ActionArgumentCompleter.ACTION_ARGUMENTS.keys())


class Session:
    """The state of a CLI session: a game that the `claim` command appends to."""

    def __init__(self, config: Config):
        self.config = config
        self.game = GameState([], config.max_depth)


def parse_int(s: str) -> int:
    """Parses a decimal, hex (0x) or binary (0b) integer."""
    return int(s, 0)


def get_arg(args_dict: dict[str, str], name: str, pos: Optional[int] = None) -> Optional[str]:
    if name in args_dict:
        return args_dict[name]
    if pos is not None:
        return args_dict.get('@' + str(pos))
    return None


def require_arg(args_dict: dict[str, str], name: str, pos: Optional[int] = None) -> str:
    value = get_arg(args_dict, name, pos)
    if value is None:
        raise ValueError(f"Missing argument: {name}")
    return value


def execute_command(session: Session, input_line: str):
    # consider lines starting with '#' (possibly prefixed with whitespaces) as comments
    if input_line.strip().startswith("#"):
        return

    # Split into a command and the list of arguments
    try:
        input_line_list = shlex.split(input_line)
    except ValueError as e:
        print(f"Invalid command: {str(e)}")
        return

    # Ensure input_line_list is not empty
    if input_line_list:
        action = input_line_list[0].strip()
    else:
        return

    # Get the necessary arguments from input_command_list
    args_dict = {}
    pos_count = 0  # count of positional arguments
    for item in input_line_list[1:]:
        parts = item.strip().split('=', 1)
        if len(parts) == 2:
            param, value = parts
            args_dict[param] = value
        else:
            # record positional arguments with keys @0, @1, ...
            args_dict['@' + str(pos_count)] = parts[0]
            pos_count += 1

    logger.debug("Executing %s with arguments %s", action, args_dict)

    game = session.game

    if action == "":
        return
    elif action not in actions:
        print("Invalid action")
        return
    elif action == "help":
        print("Available actions: " + ", ".join(actions))
    elif action == "pos":
        pos = Position.from_gindex(parse_int(require_arg(args_dict, "gindex", 0)))
        print(pos)
        if pos.depth <= game.max_depth:
            print(pos.describe(game.max_depth))
    elif action in ["attack", "defend", "parent"]:
        pos = Position.from_gindex(parse_int(require_arg(args_dict, "gindex", 0)))
        if action == "attack":
            result = pos.attack()
        elif action == "defend":
            result = pos.defend()
        else:
            result = pos.parent()
        print(result.to_gindex())
    elif action == "relative":
        pos = Position.from_gindex(parse_int(require_arg(args_dict, "gindex", 0)))
        ancestor_depth = parse_int(require_arg(args_dict, "depth", 1))
        print(pos.relative_to_ancestor_at_depth(ancestor_depth).to_gindex())
    elif action == "trace":
        pos = Position.from_gindex(parse_int(require_arg(args_dict, "gindex", 0)))
        max_depth_str = get_arg(args_dict, "max_depth", 1)
        max_depth = game.max_depth if max_depth_str is None else parse_int(max_depth_str)
        print(pos.trace_index(max_depth))
    elif action == "claim":
        pos = Position.from_gindex(parse_int(require_arg(args_dict, "gindex")))
        value = hash_from_hex(require_arg(args_dict, "value"))
        parent_str = get_arg(args_dict, "parent")
        parent_index = None if parent_str is None else parse_int(parent_str)

        if parent_index is not None and parent_index not in range(len(game)):
            raise ValueError("Invalid parent")

        claim = Claim(ClaimData(value, pos), contract_index=len(game), parent_contract_index=parent_index)
        game.put(claim)
        print(claim.contract_index)
    elif action == "list":
        for claim in game.claims():
            print(claim.contract_index, claim.position.to_gindex(), format_hash(claim.value), claim.parent_contract_index)
    elif action == "defends":
        claim_index = parse_int(require_arg(args_dict, "item", 0))
        if claim_index not in range(len(game)):
            raise ValueError("Invalid item")
        print(game.defends_parent(game.claims()[claim_index]))
    elif action == "dup":
        pos = Position.from_gindex(parse_int(require_arg(args_dict, "gindex")))
        value = hash_from_hex(require_arg(args_dict, "value"))
        print(game.is_duplicate(Claim(ClaimData(value, pos))))


def cli_main(session: Session):
    completer = ActionArgumentCompleter()
    # Create a history object
    history = FileHistory(session.config.history_file)

    while True:
        try:
            input_line = prompt("fg> ", history=history, completer=completer)
            execute_command(session, input_line)
        except (KeyboardInterrupt, EOFError):
            raise  # exit
        except Exception as err:
            logger.exception("Error executing command")
            print(f"Error: {err}")
            print(traceback.format_exc())


def script_main(session: Session, script_filename: str) -> bool:
    """Executes the commands in the script, stopping at the first failure. Returns True if all commands succeeded."""
    with open(script_filename, "r") as script_file:
        for input_line in script_file:
            try:
                execute_command(session, input_line)
            except Exception as e:
                logger.exception("Error executing command %r", input_line.strip())
                print(f"Error executing command: {input_line.strip()} - Error: {str(e)}")
                return False
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(description="Explore the positions of a fault dispute game tree")

    parser.add_argument("--max-depth", "-d", type=int, help="Max depth of the game tree")

    # Script file option
    parser.add_argument("--script", "-s", type=str, help="Execute commands from script file")

    args = parser.parse_args(argv)

    config = load_config()
    if args.max_depth is not None:
        if args.max_depth < 0:
            parser.error("--max-depth must be non-negative")
        config = replace(config, max_depth=args.max_depth)

    logging.basicConfig(filename=config.log_file, level=config.log_level)
    logger.info("Starting with max depth %d", config.max_depth)

    session = Session(config)

    if args.script:
        if not script_main(session, args.script):
            return 1
    else:
        try:
            cli_main(session)
        except (KeyboardInterrupt, EOFError):
            pass  # exit
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
