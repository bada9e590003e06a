import os
import pickle
import inquirer

import logging
logger = logging.getLogger(__name__)


def save_data(data_to_save, name, directory):
    with open(directory+os.sep+name+'.cache', 'wb') as f:
        pickle.dump(data_to_save, f)


def restore_dict(name, directory=''):
    path = os.path.join(directory, name+'.cache')
    try:
        with open(path, 'rb') as f:
            return pickle.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, pickle.UnpicklingError, EOFError) as ex:
        logger.warning(f"Ignoring unreadable cache {path}: {ex}")
        return {}


def list_menu(name, choices, message):
    '''
    single choice list prompt, returns the inquirer answers dict keyed by name
    '''
    questions = [inquirer.List(name, message=message, choices=choices)]
    return inquirer.prompt(questions)


def get_image_files(directory, extensions):
    '''
    image and sheet files directly inside directory, sheets first so their
    track files can be skipped
    '''
    files = [f for f in sorted(os.listdir(directory))
             if os.path.isfile(os.path.join(directory, f)) and os.path.splitext(f)[1].lower() in extensions]
    return sorted(files, key=lambda f: os.path.splitext(f)[1].lower() not in ('.cue', '.gdi'))
