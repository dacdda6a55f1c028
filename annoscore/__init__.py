"""
The annoscore library scores documents by the occurrences of a query
word.  A document goes through four stages, each adding annotations to
a store that belongs to that document alone:

* segmentation: sentences and tokens (`annoscore.stages.Segmenter`,
  backed by a tool from `annoscore.external.segment`)
* marking: a *unit* for each token that is exactly the query word
* scoring: a score for each unit (`annoscore.scoring`)
* aggregation: one document-wide *aggregate* holding the mean score

Layers
~~~~~~
From the bottom up:

* annotations (`annoscore.annotation`, `annoscore.typesystem`,
  `annoscore.store`): spans, typed records and the per-document index
  they live in

* pipeline (`annoscore.stages`, `annoscore.pipeline`): the stages and
  the runner that takes a document through them in order

* corpus (`annoscore.corpus`, `annoscore.cmd`): reading a directory of
  documents and scoring them in bulk ::

          cmd
           |
         corpus
           |
        pipeline  --> stages --> external
           |            |
           +------> annotation, store, typesystem
"""
