# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

import os
import logging

logger = logging.getLogger(__name__)


BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
LEVEL = os.environ.get("COMBINED_LOG_LEVEL", "INFO")

ALLOWED_HOSTS = ['*']
DEBUG = False
INSTALLED_APPS = [
    'combined.apps.CombinedConfig',
]
LANGUAGE_CODE = "en"
LANGUAGES = [("en", "English"), ("sv", "Swedish")]
LOCALE_PATHS = [os.path.join(BASE_DIR, "locale")]
LOGGING = {'version': 1, 'disable_existing_loggers': False,
           'formatters': {
                'middle': {'format': 'middle %(levelname)s %(asctime)s %(module)s %(process)d %(filename)s %(funcName)s [%(message)s]'},
                'simple': {'format': 'simple %(levelname)s %(message)s'},
                'console': {'format': 'console %(asctime)s.%(msecs)03d %(levelname)-5.5s %(filename)s:%(lineno)s [%(funcName)s]  %(message)s', 'datefmt': '%H:%M:%S'}},
            'handlers': {
                'console': {'level': LEVEL, 'class': 'logging.StreamHandler', 'formatter': 'console'},
                'stderr': {'level': LEVEL, 'class': 'logging.StreamHandler', 'formatter': 'middle'}},
            'root': {
                'handlers': ['console'], 'level': LEVEL},
            'loggers': {
                'django': {'handlers': ['stderr'], 'level': LEVEL, 'propagate': False},
                'combined': {'handlers': ['console'], 'level': LEVEL, 'propagate': False},
                'combined.questiontypes': {'handlers': ['console'], 'level': LEVEL, 'propagate': False}}}
RUNNING_DEVSERVER = False
SECRET_KEY = os.environ.get("COMBINED_SECRET_KEY", "combined-question-insecure-key")
TIME_ZONE = "Europe/Stockholm"
USE_I18N = True
USE_TZ = True

# Combined question settings
COMBINED_DEFAULT_WIDTH = 20  # input size used when a placeholder carries no width specifier
COMBINED_TEXT_EDITORS = ['supsub']  # rich text editors that may be attached to text entry subquestions
COMBINED_MAX_CHOICES = 6  # number of choice rows offered when authoring gapselect and oumultiresponse
PMATCH_CONVERT_TO_SPACE = ",;:"
